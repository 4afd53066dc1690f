from __future__ import annotations

import logging
import os
import platform
from dataclasses import dataclass
from typing import Any, Callable

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from src.config import ExecutionEnvironment, ScraperConfig
from src.scraper.errors import BrowserLaunchError

LOGGER = logging.getLogger("browser_session")

LOCAL_LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-blink-features=AutomationControlled",
)
SERVERLESS_LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--single-process",
    "--no-zygote",
    "--ignore-certificate-errors",
)

_HIDE_WEBDRIVER_SCRIPT = "Object.defineProperty(navigator, 'webdriver', {get: () => undefined});"


def candidate_executable_paths(system: str | None = None, environ: dict[str, str] | None = None) -> list[str]:
    system_name = (system or platform.system()).lower()
    env = os.environ if environ is None else environ

    if system_name == "windows":
        roots = [
            env.get("PROGRAMFILES", r"C:\Program Files"),
            env.get("PROGRAMFILES(X86)", r"C:\Program Files (x86)"),
            env.get("LOCALAPPDATA", ""),
        ]
        paths: list[str] = []
        for root in roots:
            if not root:
                continue
            paths.append(rf"{root}\Google\Chrome\Application\chrome.exe")
            paths.append(rf"{root}\Chromium\Application\chrome.exe")
        return paths

    if system_name == "darwin":
        return [
            "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
            "/Applications/Chromium.app/Contents/MacOS/Chromium",
        ]

    return [
        "/usr/bin/google-chrome",
        "/usr/bin/google-chrome-stable",
        "/usr/bin/chromium",
        "/usr/bin/chromium-browser",
        "/snap/bin/chromium",
    ]


def resolve_executable_path(
    config: ScraperConfig,
    *,
    system: str | None = None,
    exists: Callable[[str], bool] = os.path.isfile,
) -> str | None:
    """Pick a browser binary, or None to use the driver's bundled Chromium."""
    if config.execution_environment == ExecutionEnvironment.SERVERLESS:
        path = config.serverless_executable_path
        if path and exists(path):
            return path
        return None

    if config.executable_path:
        if exists(config.executable_path):
            return config.executable_path
        LOGGER.warning("Configured browser executable not found: %s", config.executable_path)

    for path in candidate_executable_paths(system):
        if exists(path):
            return path

    return None


def build_launch_options(config: ScraperConfig, executable_path: str | None) -> dict[str, Any]:
    if config.execution_environment == ExecutionEnvironment.SERVERLESS:
        base_args = SERVERLESS_LAUNCH_ARGS
    else:
        base_args = LOCAL_LAUNCH_ARGS

    args = list(dict.fromkeys([*base_args, *config.extra_chromium_args]))
    options: dict[str, Any] = {
        "headless": config.headless,
        "args": args,
    }
    if executable_path:
        options["executable_path"] = executable_path
    return options


def build_context_options(config: ScraperConfig) -> dict[str, Any]:
    return {
        "viewport": {"width": config.viewport_width, "height": config.viewport_height},
        "user_agent": config.user_agent,
        "ignore_https_errors": True,
    }


@dataclass
class BrowserSession:
    playwright: Playwright | None
    browser: Browser | None
    context: BrowserContext | None
    page: Page | None

    async def close(self) -> None:
        # Each layer is released on its own so one failure does not leak the rest.
        if self.context is not None:
            try:
                await self.context.close()
            except Exception:
                LOGGER.warning("Failed to close browser context.", exc_info=True)

        if self.browser is not None:
            try:
                await self.browser.close()
            except Exception:
                LOGGER.warning("Failed to close browser.", exc_info=True)

        if self.playwright is not None:
            try:
                await self.playwright.stop()
            except Exception:
                LOGGER.warning("Failed to stop playwright driver.", exc_info=True)

        self.context = None
        self.browser = None
        self.playwright = None
        self.page = None


async def launch_session(
    config: ScraperConfig,
    *,
    driver_factory: Callable[[], Any] = async_playwright,
) -> BrowserSession:
    session = BrowserSession(playwright=None, browser=None, context=None, page=None)
    executable_path = resolve_executable_path(config)
    launch_options = build_launch_options(config, executable_path)
    LOGGER.info(
        "Launching browser env=%s executable=%s headless=%s",
        config.execution_environment.value,
        executable_path or "bundled",
        config.headless,
    )

    try:
        session.playwright = await driver_factory().start()
        try:
            session.browser = await session.playwright.chromium.launch(**launch_options)
        except Exception:
            if "executable_path" not in launch_options:
                raise
            LOGGER.warning("Browser at %s failed to start, retrying with bundled Chromium.", executable_path)
            launch_options.pop("executable_path", None)
            session.browser = await session.playwright.chromium.launch(**launch_options)

        session.context = await session.browser.new_context(**build_context_options(config))
        await session.context.add_init_script(_HIDE_WEBDRIVER_SCRIPT)
        session.page = await session.context.new_page()
    except Exception as exc:
        await session.close()
        raise BrowserLaunchError(f"Failed to launch browser: {exc}") from exc

    return session
