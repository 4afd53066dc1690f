class ScraperError(RuntimeError):
    pass


class BrowserLaunchError(ScraperError):
    """The browser session could not be started; the request cannot proceed."""


class ScrapePipelineError(ScraperError):
    """Unexpected failure after the session was launched."""

    def __init__(self, message: str, *, states: list | None = None) -> None:
        super().__init__(message)
        self.states = states if states is not None else []
