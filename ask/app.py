"""Application bootstrap.

Embedding callers (an HTTP layer, a worker, a script) start here:

    container = create_app()
    async with container() as request:
        use_case = await request.get(CastVoteUseCase)
        await use_case.execute(CastVoteRequest(...))
    await container.close()
"""

from typing import Optional

from dishka import AsyncContainer

from ask.config import Settings
from ask.util.di.container import create_container
from ask.util.logging import get_logger, setup_logging
from ask.util.observability import configure_logfire

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> AsyncContainer:
    """Configure logging and observability, then build the DI container.

    Args:
        settings: Settings for logging and the container; loaded from the environment if omitted

    Returns:
        Production DI container
    """
    settings = settings or Settings()
    setup_logging(settings)
    configure_logfire(settings)

    container = create_container(settings)
    logger.info("Container ready: storage backend=%s", settings.storage.backend)
    return container
