from contextlib import asynccontextmanager
import logging

from cvscore.core.config.scoring import get_scoring_value
from cvscore.engine import get_default_analyzer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    # Fail at startup, not on the first request, if the catalog or scoring config is broken.
    analyzer = get_default_analyzer()
    logger.info(
        "cv_engine_ready catalog_version=%s scoring_version=%s locale=%s sections=%s skills=%s regional_categories=%s",
        analyzer.catalog.version,
        get_scoring_value("version", "unversioned"),
        analyzer.catalog.locale,
        len(analyzer.catalog.sections),
        len(analyzer.catalog.skills),
        len(analyzer.catalog.regional_categories),
    )
    yield
