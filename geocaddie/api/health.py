import platform
import time
from typing import Any, Dict

from fastapi import Depends

from geocaddie import __version__
from geocaddie.config import get_settings
from geocaddie.rounds import RoundSessionService, get_round_session_service


async def health(
    service: RoundSessionService = Depends(get_round_session_service),
) -> Dict[str, Any]:
    settings = get_settings()
    return {
        "status": "ok",
        "version": settings.build_version or __version__,
        "git": settings.git_sha,
        "ts": time.time(),
        "env": {
            "use_yards": settings.use_yards,
            "require_api_key": settings.require_api_key,
        },
        "rounds": {"active": service.active_count()},
        "runtime": {
            "python": platform.python_version(),
        },
    }
