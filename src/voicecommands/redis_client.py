"""Shared Redis connection for session contexts and pending confirmations.

Both stores accept ``None`` and keep their data in process memory instead, so
an unreachable server degrades to single-process operation rather than
failing requests.
"""

import logging
import os

import redis

from voicecommands.logging_utils import log_error, log_info, log_warning

logger = logging.getLogger(__name__)

_CONNECT_TIMEOUT_SECONDS = 2


def _redis_enabled() -> bool:
    return os.environ.get("REDIS_ENABLED", "true").strip().lower() not in ("false", "0", "no", "off")


def get_redis_client(
    host: str | None = None,
    port: int | None = None,
    db: int = 0,
    decode_responses: bool = True,
    url: str | None = None,
) -> redis.Redis | None:
    """Connect to the Redis server that backs session and confirmation state.

    A URL (argument or VOICECOMMANDS_REDIS_URL) takes precedence over
    host and port, which otherwise come from REDIS_HOST and REDIS_PORT.

    Returns:
        A client that answered PING, or None when Redis is switched off with
        REDIS_ENABLED or cannot be reached
    """
    if not _redis_enabled():
        log_info(logger, "Redis switched off, session state stays in memory")
        return None

    url = url or os.environ.get("VOICECOMMANDS_REDIS_URL")
    if url:
        target = url
        client = redis.Redis.from_url(
            url,
            decode_responses=decode_responses,
            socket_connect_timeout=_CONNECT_TIMEOUT_SECONDS,
            socket_timeout=_CONNECT_TIMEOUT_SECONDS,
        )
    else:
        host = host or os.environ.get("REDIS_HOST", "localhost")
        port = port or int(os.environ.get("REDIS_PORT", "6379"))
        target = f"{host}:{port}/{db}"
        client = redis.Redis(
            host=host,
            port=port,
            db=db,
            decode_responses=decode_responses,
            socket_connect_timeout=_CONNECT_TIMEOUT_SECONDS,
            socket_timeout=_CONNECT_TIMEOUT_SECONDS,
        )

    try:
        client.ping()
    except redis.ConnectionError as e:
        log_warning(logger, "Redis unreachable, session state stays in memory", target=target, error=str(e))
        return None
    except redis.RedisError as e:
        log_error(logger, "Redis rejected the connection check", target=target, error=str(e))
        return None

    log_info(logger, "Session state stored in Redis", target=target)
    return client
