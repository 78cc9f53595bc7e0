"""Service start-up and health checks"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.logger import logger
from services.email_reminder_service import EmailReminderService


def initialize_services(config: Optional[Dict[str, Any]] = None) -> bool:
    """Check that the reminder service can be built from `config`."""
    try:
        logger.info('Initializing NAHS services...')
        EmailReminderService(options={**(config or {}), 'debug_mode': True})
        logger.info('Services initialized successfully')
        return True
    except Exception as e:
        logger.error(f"Error initializing services: {str(e)}")
        return False


def check_service_health(options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Report whether the reminder service can be constructed.

    Returns:
        Dict with email_service and overall_health ('healthy'/'unhealthy'),
        last_checked, and an error message when unhealthy.
    """
    status: Dict[str, Any] = {
        'email_service': 'unknown',
        'overall_health': 'unknown',
        'last_checked': datetime.now(timezone.utc).isoformat(),
    }
    try:
        EmailReminderService(options=options or {'debug_mode': True})
        status['email_service'] = 'healthy'
        status['overall_health'] = 'healthy'
        logger.info(f"Service health check completed: {status}")
    except Exception as e:
        logger.error(f"Error during service health check: {str(e)}")
        status['email_service'] = 'unhealthy'
        status['overall_health'] = 'unhealthy'
        status['error'] = str(e)
    return status
