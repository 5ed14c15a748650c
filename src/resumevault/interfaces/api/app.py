"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from resumevault.domain.exceptions import (
    NotFound,
    StoreUnavailable,
    ValidationError,
    VersionConflict,
)
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

logger = logging.getLogger(__name__)


async def _handle_not_found(req, resp, ex: NotFound, params) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": str(ex)}


async def _handle_validation_error(req, resp, ex: ValidationError, params) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": str(ex)}


async def _handle_version_conflict(req, resp, ex: VersionConflict, params) -> None:
    resp.status = falcon.HTTP_409
    resp.media = {"error": str(ex), "version_number": ex.version_number}


async def _handle_store_unavailable(req, resp, ex: StoreUnavailable, params) -> None:
    logger.error("Store unavailable on %s %s: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_503
    resp.media = {"error": "Storage unavailable"}


async def _handle_unexpected(req, resp, ex: Exception, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal Server Error"}


def create_app(
    *,
    resumes_resource: ResumesResource,
    resume_upload_resource: ResumeUploadResource,
    resume_resource: ResumeResource,
    versions_resource: VersionsResource,
    version_resource: VersionResource,
    generations_resource: GenerationsResource,
    generation_resource: GenerationResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])

    app.add_error_handler(Exception, _handle_unexpected)
    app.add_error_handler(StoreUnavailable, _handle_store_unavailable)
    app.add_error_handler(NotFound, _handle_not_found)
    app.add_error_handler(ValidationError, _handle_validation_error)
    app.add_error_handler(VersionConflict, _handle_version_conflict)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/resumes", resumes_resource)
    app.add_route("/v1/resumes/upload", resume_upload_resource)
    app.add_route("/v1/resumes/{resume_id}", resume_resource)
    app.add_route("/v1/resumes/{resume_id}/versions", versions_resource)
    app.add_route(
        "/v1/resumes/{resume_id}/versions/{version_number}", version_resource
    )
    app.add_route(
        "/v1/resumes/{resume_id}/versions/{version_number}/snapshot",
        version_resource,
        suffix="snapshot",
    )
    app.add_route("/v1/generations", generations_resource)
    app.add_route("/v1/generations/{generation_id}", generation_resource)
    return app
