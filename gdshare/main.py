import argparse
import logging
import sys

from pydantic import ValidationError

from .config import Settings, get_settings
from .exceptions import AuthenticationError
from .folder_manager import FolderFileManager
from .gdrive import GoogleDriveClient
from .gdrive_auth import gdrive_authenticate


def setup_logging(settings: Settings):
    """Configures logging to file and console explicitly."""
    log_level_name = settings.LOG_LEVEL.upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    # Get the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers to prevent duplicate logs on re-runs or implicit configs
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Console output goes to stderr so stdout only carries the report
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    try:
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except OSError as e:
        root_logger.error(f"Failed to set up file logging to {settings.LOG_FILE}: {e}")

    # Reducing "noise" from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    logging.getLogger("google_auth_oauthlib").setLevel(logging.WARNING)


def initialize_storage_client(settings: Settings) -> GoogleDriveClient:
    """
    Authenticates and returns a ready Google Drive client.

    Raises:
        AuthenticationError: If credentials or the client could not be created.
    """
    logging.info("Authorising connection to Google Drive...")
    credentials = gdrive_authenticate(
        credentials_path=settings.CREDENTIALS_PATH,
        token_path=settings.TOKEN_PATH,
        scopes=settings.GDRIVE_SCOPES,
    )
    try:
        return GoogleDriveClient(credentials)
    except Exception as e:
        raise AuthenticationError(f"Unable to create Google Drive client: {e}") from e


def _page_size(value: str) -> int:
    size = int(value)
    if not 1 <= size <= 1000:
        raise argparse.ArgumentTypeError("page size must be between 1 and 1000")
    return size


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gdshare",
        description="Upload, list and purge files in a Google Drive folder.",
    )
    commands = parser.add_mutually_exclusive_group(required=True)
    commands.add_argument(
        "-u", "--upload", metavar="PATH", help="Upload a file to the configured folder."
    )
    commands.add_argument(
        "-d",
        "--delete-old",
        action="store_true",
        help="Delete files in the configured folder older than --max-days.",
    )
    commands.add_argument(
        "-s", "--show", action="store_true", help="List files in the configured folder."
    )
    commands.add_argument(
        "-a",
        "--all",
        dest="all_files",
        nargs="?",
        type=_page_size,
        const=0,
        metavar="N",
        help="List up to N files across the whole drive.",
    )
    commands.add_argument(
        "-f", "--folders", action="store_true", help="List folders and their IDs."
    )
    commands.add_argument(
        "-i", "--info", metavar="FILE_ID", help="Show the name of a single file."
    )
    parser.add_argument(
        "--description", help="Description stored with an uploaded file."
    )
    parser.add_argument(
        "--max-days",
        type=_non_negative_int,
        help="Retention in days for --delete-old (default: MAX_AGE_DAYS).",
    )
    return parser


def run_command(args: argparse.Namespace, manager: FolderFileManager, settings: Settings) -> str:
    """Runs the single requested operation and returns its report."""
    if args.upload is not None:
        return manager.upload_file(
            args.upload, args.description or settings.UPLOAD_DESCRIPTION
        )
    if args.delete_old:
        max_days = settings.MAX_AGE_DAYS if args.max_days is None else args.max_days
        return manager.purge_expired_files(max_days)
    if args.show:
        return manager.list_folder_contents()
    if args.all_files is not None:
        return manager.list_files(args.all_files or settings.LIST_PAGE_SIZE)
    if args.folders:
        return manager.list_folders()
    if args.info is not None:
        return manager.describe_file(args.info)
    raise ValueError("No command given.")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        # Logging is not configured yet
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)

    try:
        storage_client = initialize_storage_client(settings)
    except AuthenticationError as e:
        logging.critical(f"Could not establish a connection to Google Drive. Error: {e}")
        return 1

    manager = FolderFileManager(storage_client, settings.GDRIVE_FOLDER_ID)
    try:
        report = run_command(args, manager, settings)
    except Exception as e:
        logging.critical(f"An unexpected error occurred: {e}", exc_info=True)
        return 1

    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
