"""Generation job API resources."""

from uuid import UUID

import falcon.asgi

from resumevault.application.dto.generation_dto import GenerationCreateInput
from resumevault.application.use_cases.generation.create_generation import (
    CreateGenerationUseCase,
)
from resumevault.domain.entities import Generation
from resumevault.domain.exceptions import NotFound, ValidationError
from resumevault.interfaces.api.resources.versions import parse_version_number


def _generation_to_dict(g: Generation) -> dict:
    return {
        "id": str(g.id),
        "resume_id": str(g.resume_id),
        "version_number": g.version_number,
        "status": g.status.value,
        "output_filename": g.output_filename,
        "meta_code": g.meta_code,
        "pdf_path": g.pdf_path,
        "drive_link": g.drive_link,
        "error_log": g.error_log,
        "created_at": g.created_at.isoformat(),
        "updated_at": g.updated_at.isoformat(),
    }


class GenerationsResource:
    """GET/POST /v1/generations - list and queue PDF generation jobs."""

    def __init__(
        self, create_generation: CreateGenerationUseCase, unit_of_work_factory: type
    ) -> None:
        self._create_generation = create_generation
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List jobs newest first; ?resume_id= filters."""
        resume_id = None
        raw = req.get_param("resume_id")
        if raw:
            try:
                resume_id = UUID(raw)
            except ValueError:
                resp.status = falcon.HTTP_400
                resp.media = {"error": "Invalid resume ID"}
                return
        limit = req.get_param_as_int("limit") or 50
        limit = min(max(limit, 1), 200)

        async with self._uow_factory() as uow:
            jobs = await uow.generations.list(resume_id=resume_id, limit=limit)

        resp.media = {"items": [_generation_to_dict(g) for g in jobs]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Queue a job: { resume_id, version_number? }."""
        try:
            body = await req.get_media()
            resume_id = UUID(body["resume_id"])
            version_number = body.get("version_number")
            if version_number is not None:
                version_number = parse_version_number(version_number)
                if version_number is None:
                    raise ValueError("version_number must be a positive integer")
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            job = await self._create_generation.execute(
                GenerationCreateInput(resume_id=resume_id, version_number=version_number)
            )
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = {
            **_generation_to_dict(job),
            "message": f"Generation job queued: {job.output_filename}.pdf",
        }
        resp.status = falcon.HTTP_201


class GenerationResource:
    """GET /v1/generations/{generation_id} - poll job status."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, generation_id: str
    ) -> None:
        try:
            gid = UUID(generation_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid generation ID"}
            return

        async with self._uow_factory() as uow:
            job = await uow.generations.get_by_id(gid)
        if not job:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Generation job not found"}
            return
        resp.media = _generation_to_dict(job)
        resp.status = falcon.HTTP_200
