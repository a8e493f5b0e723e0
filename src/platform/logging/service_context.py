"""
Service context for log lines.

Identifies which process wrote a log line when several app workers share
one log sink.
"""

import os
from functools import lru_cache

from src.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def get_service_context() -> str:
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    return f'{settings.SERVICE_NAME}@{deploy_env}:{os.getpid()}'
