"""
Main entry point for the statistics dashboard
"""

import argparse
import asyncio
import sys

from rich.console import Console
from rich.markdown import Markdown

from readstats import __version__
from readstats.config import get_settings
from readstats.dashboard import (
    DashboardController,
    JsonFileConfigurationStore,
    StatsAPIClient,
    ViewState,
    ViewStatus,
    format_view_state,
)
from readstats.utils import get_logger, setup_logging


def build_controller() -> DashboardController:
    """設定からコントローラーを構築"""
    settings = get_settings()
    store = JsonFileConfigurationStore(settings.config_store_path)
    client = StatsAPIClient(
        timeout=settings.stats_request_timeout,
        connect_timeout=settings.stats_connect_timeout,
    )
    return DashboardController(store, client)


async def run_dashboard(
    controller: DashboardController, api_url: str | None = None
) -> ViewState:
    """URL が指定されていれば保存して取得、無ければ保存済み URL で初期化"""
    if api_url is not None:
        task = controller.submit_url(api_url)
    else:
        task = controller.initialize()

    if task is None:
        return controller.state
    return await task


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show usage statistics of the reading-time estimation service"
    )
    parser.add_argument(
        "--api-url",
        help="Base URL of the statistics API (saved for later runs)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main function"""
    args = parse_args(argv)

    setup_logging()
    logger = get_logger("main")
    logger.info(
        "Starting statistics dashboard",
        version=__version__,
        environment=get_settings().environment,
    )

    controller = build_controller()
    state = asyncio.run(run_dashboard(controller, args.api_url))

    console = Console()
    console.print(Markdown(format_view_state(state, controller.api_url)))

    return 1 if state.status is ViewStatus.ERROR else 0


if __name__ == "__main__":
    sys.exit(main())
