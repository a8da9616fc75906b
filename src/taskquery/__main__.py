"""CLI entry point for taskquery."""

import argparse
import asyncio
from pathlib import Path

from .config import Settings
from .exceptions import TaskFileError
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="taskquery",
        description="Filter markdown tasks with a boolean search query",
    )
    parser.add_argument("query", help='Search query, e.g. "tag:work -state:DONE"')
    parser.add_argument(
        "--task-root",
        type=Path,
        default=None,
        help="Directory with tasks.yaml, taskquery.yml and documents (default: current directory)",
    )
    parser.add_argument(
        "--tasks",
        type=Path,
        default=None,
        help="Task file to search (default: <task-root>/tasks.yaml)",
    )
    parser.add_argument(
        "-c",
        "--case-sensitive",
        action="store_true",
        default=None,
        help="Match text case-sensitively",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only validate the query and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    return parser.parse_args(argv)


def run(settings: Settings, args: argparse.Namespace) -> int:
    """Run a query and print matching tasks. Returns the exit code."""
    from .cli.output import error, info, success
    from .repositories import FrontmatterPropertySource, TaskFileRepository
    from .search import Search, SearchEvaluator
    from .services import ConfigService, FilterService

    config = ConfigService(settings.project_root).get_config()
    evaluator = SearchEvaluator(FrontmatterPropertySource(settings.project_root))
    search = Search.from_config(config, evaluator)

    message = search.get_error(args.query)
    if message is not None:
        error(f"Invalid query: {message}")
        return 1
    if args.check:
        success("Query is valid")
        return 0

    repository = (
        TaskFileRepository(settings.tasks_file)
        if settings.tasks_file is not None
        else TaskFileRepository.for_root(settings.project_root)
    )
    try:
        tasks = repository.get_all()
    except TaskFileError as e:
        error(str(e))
        return 1

    service = FilterService(search, config)
    matches = asyncio.run(service.apply(tasks, args.query, args.case_sensitive))
    for task in matches:
        print(f"{task.path}:{task.line}: {task.raw_text}")
    info(f"{len(matches)} of {len(tasks)} tasks matched")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    settings_kwargs: dict = {}
    if args.task_root:
        settings_kwargs["project_root"] = args.task_root
    if args.tasks:
        settings_kwargs["tasks_file"] = args.tasks
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)
    setup_logging(settings.verbose, settings.log_file)

    raise SystemExit(run(settings, args))


if __name__ == "__main__":
    main()
