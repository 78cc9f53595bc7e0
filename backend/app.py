from dotenv import load_dotenv
import sys
from pathlib import Path

# Load environment variables BEFORE reading settings
backend_dir = Path(__file__).parent
env_path = backend_dir / '.env'
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

# Also try to load from root directory if not found in backend
root_env_path = backend_dir.parent / '.env'
if root_env_path.exists():
    load_dotenv(dotenv_path=root_env_path)

if not env_path.exists() and not root_env_path.exists():
    # On the scheduler host, environment variables are set directly
    load_dotenv()

from core.config import Settings
from core.exceptions import NahsError
from core.logger import logger
from loaders.config import configs_for_settings
from loaders.student_loaders import StudentDataLoader, load_all_sources
from services.email_reminder_service import EmailReminderService
from services.email_sender import GmailSender
from sheets.sheet_reader import GoogleSheetReader
from sheets.sheets_utils import student_map_to_dataframe


def build_reminder_service(settings: Settings, reader) -> EmailReminderService:
    configs = configs_for_settings(settings)
    sender = None if settings.debug_mode else GmailSender(settings.sender_email)
    return EmailReminderService(
        student_loader=StudentDataLoader(reader, configs['tentative']),
        sender=sender,
        options=settings.reminder_options(),
    )


def run_daily_reminders(settings: Settings, reader) -> dict:
    """Scheduled entry point: send today's 10-day reminder."""
    service = build_reminder_service(settings, reader)
    return service.send_daily_reminders()


def run_load_summary(settings: Settings, reader) -> dict:
    """Load every sheet and log how many students and rows each produced."""
    results = load_all_sources(reader, configs_for_settings(settings).values())
    summary = {}
    for name, student_map in results.items():
        df = student_map_to_dataframe(student_map)
        summary[name] = {'students': len(student_map), 'rows': len(df)}
        logger.info(f"{name}: {len(student_map)} students, {len(df)} rows")
    return summary


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        settings = Settings.from_env()
        if '--debug' in argv:
            settings.debug_mode = True
        reader = GoogleSheetReader(settings.spreadsheet_id)

        if '--summary' in argv:
            run_load_summary(settings, reader)
        else:
            result = run_daily_reminders(settings, reader)
            logger.info(f"Reminder result: {result}")
        return 0
    except NahsError as e:
        logger.error(f"Run aborted: {str(e)}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
