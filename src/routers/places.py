from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from src.config import settings
from src.services.places_service import PlacesAutocompleteClient, PlacesUpstreamError

router = APIRouter(prefix="/api/places")


def get_places_client() -> PlacesAutocompleteClient:
    return PlacesAutocompleteClient(
        api_key=settings.google_api_key,
        endpoint_url=settings.places_autocomplete_url,
        timeout_s=settings.places_timeout_s,
    )


@router.get("/autocomplete", tags=["Places"])
async def autocomplete_places(
    input_text: str | None = Query(default=None, alias="input"),
    client: PlacesAutocompleteClient = Depends(get_places_client),
) -> JSONResponse:
    if not (input_text or "").strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Input query is required"},
        )

    try:
        payload = await client.autocomplete(input_text or "")
    except PlacesUpstreamError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(exc)},
        )
    return JSONResponse(status_code=status.HTTP_200_OK, content=payload)
