"""Application entry point and composition root."""

import logging

from resumevault import __version__
from resumevault.application.services import (
    ResumeAggregate,
    RollbackCoordinator,
    SnapshotResolver,
)
from resumevault.application.use_cases.generation.create_generation import (
    CreateGenerationUseCase,
)
from resumevault.application.use_cases.resume.delete_resume import DeleteResumeUseCase
from resumevault.application.use_cases.resume.get_resume import GetResumeUseCase
from resumevault.application.use_cases.version.get_version import GetVersionUseCase
from resumevault.application.use_cases.version.list_versions import ListVersionsUseCase
from resumevault.config import Settings, get_settings
from resumevault.infrastructure.persistence.postgres.connection import create_pool
from resumevault.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from resumevault.interfaces.api.app import create_app
from resumevault.interfaces.api.middleware.cors import CORSMiddleware
from resumevault.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from resumevault.interfaces.api.resources.generations import (
    GenerationResource,
    GenerationsResource,
)
from resumevault.interfaces.api.resources.health import HealthResource
from resumevault.interfaces.api.resources.resumes import (
    ResumeResource,
    ResumesResource,
    ResumeUploadResource,
)
from resumevault.interfaces.api.resources.versions import VersionResource, VersionsResource
from resumevault.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_resources(uow_factory: object, settings: Settings) -> dict:
    """Wire services and use cases into API resources."""
    aggregate = ResumeAggregate(
        unit_of_work_factory=uow_factory,
        max_attempts=settings.version_conflict_max_attempts,
        allowed_sections=settings.section_names,
    )
    rollback_coordinator = RollbackCoordinator(aggregate)
    snapshot_resolver = SnapshotResolver(uow_factory)
    list_versions = ListVersionsUseCase(uow_factory)
    create_generation = CreateGenerationUseCase(
        unit_of_work_factory=uow_factory,
        snapshot_resolver=snapshot_resolver,
    )

    return {
        "resumes_resource": ResumesResource(aggregate, uow_factory),
        "resume_upload_resource": ResumeUploadResource(aggregate),
        "resume_resource": ResumeResource(
            aggregate,
            GetResumeUseCase(uow_factory),
            DeleteResumeUseCase(uow_factory),
            list_versions,
        ),
        "versions_resource": VersionsResource(list_versions, rollback_coordinator),
        "version_resource": VersionResource(
            GetVersionUseCase(uow_factory), snapshot_resolver
        ),
        "generations_resource": GenerationsResource(create_generation, uow_factory),
        "generation_resource": GenerationResource(uow_factory),
        "health_resource": HealthResource(uow_factory),
    }


def create_resumevault_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_pool_timeout,
    )
    uow_factory = create_uow_factory(pool)

    app = create_app(
        **build_resources(uow_factory, settings),
        middleware=[
            CORSMiddleware(settings.cors_origin_list),
            PoolLifespanMiddleware(pool),
        ],
    )
    logger.info("ResumeVault v%s ready (%s)", __version__, settings.environment)
    return app


def main() -> None:
    """CLI entry point - run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "resumevault.main:create_resumevault_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
