import contextlib
import logging
from typing import AsyncIterator

from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession

from merchnexus.errors import ReferentialIntegrityError, StoreUnavailable

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run the enclosed statements as one unit of work.

    Commits when the block exits cleanly and rolls back on any error. Store
    faults are translated: integrity violations become
    ReferentialIntegrityError, every other driver error (connectivity, missing
    schema objects) becomes StoreUnavailable.
    Anything else (including the service's own errors) is re-raised as-is.
    """
    try:
        yield db
        await db.commit()

    except sa_exc.IntegrityError as e:
        await db.rollback()
        logger.warning("Store rejected write: %s", e.orig)
        raise ReferentialIntegrityError("A referenced record does not exist.") from e

    except (sa_exc.DBAPIError, OSError) as e:
        await _rollback_quietly(db)
        logger.error("Store unavailable: %s", e)
        raise StoreUnavailable("The data store is currently unavailable.") from e

    except BaseException:
        await _rollback_quietly(db)
        raise


async def _rollback_quietly(db: AsyncSession) -> None:
    # The connection may already be gone.
    try:
        await db.rollback()
    except (sa_exc.SQLAlchemyError, OSError) as e:
        logger.debug("Rollback failed: %s", e)
