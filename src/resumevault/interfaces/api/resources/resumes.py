"""Resume API resources."""

from uuid import UUID

import falcon.asgi

from resumevault.application.dto.resume_dto import ResumeCreateInput
from resumevault.application.services import ResumeAggregate
from resumevault.application.use_cases.resume.delete_resume import DeleteResumeUseCase
from resumevault.application.use_cases.resume.get_resume import GetResumeUseCase
from resumevault.application.use_cases.version.list_versions import ListVersionsUseCase
from resumevault.domain.entities import Resume, ResumeVersion, ResumeVersionSummary
from resumevault.domain.exceptions import NotFound, ValidationError


def _resume_to_dict(resume: Resume, include_data: bool = True) -> dict:
    out = {
        "id": str(resume.id),
        "meta_code": resume.meta_code,
        "title": resume.title,
        "current_version": resume.current_version,
        "created_at": resume.created_at.isoformat(),
        "updated_at": resume.updated_at.isoformat(),
    }
    if include_data:
        out["data"] = resume.data
    return out


def _summary_to_dict(v: ResumeVersionSummary | ResumeVersion) -> dict:
    return {
        "version_number": v.version_number,
        "created_at": v.created_at.isoformat(),
        "changed_sections": list(v.changed_sections),
        "change_summary": v.change_summary,
        "change_type": v.change_type.value,
    }


def _parse_resume_id(resume_id: str) -> UUID | None:
    try:
        return UUID(resume_id)
    except ValueError:
        return None


class ResumesResource:
    """GET/POST /v1/resumes - list and create resumes."""

    def __init__(self, aggregate: ResumeAggregate, unit_of_work_factory: type) -> None:
        self._aggregate = aggregate
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List resumes (no data). ?group=true groups them by meta_code."""
        cursor = req.get_param("cursor")
        meta_code = req.get_param("meta_code")
        limit = req.get_param_as_int("limit") or 20
        limit = min(max(limit, 1), 100)

        try:
            async with self._uow_factory() as uow:
                resumes, next_cursor = await uow.resumes.list(
                    meta_code=meta_code,
                    cursor=cursor,
                    limit=limit,
                )
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid cursor"}
            return

        items = [_resume_to_dict(r, include_data=False) for r in resumes]
        if req.get_param_as_bool("group"):
            grouped: dict[str, list[dict]] = {}
            for item in items:
                grouped.setdefault(item["meta_code"] or "OTHER", []).append(item)
            resp.media = {"groups": grouped, "next_cursor": next_cursor}
        else:
            resp.media = {"items": items, "next_cursor": next_cursor}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create resume from { meta_code?, title?, data }."""
        body = await req.get_media()
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Body must be a JSON object"}
            return

        try:
            resume = await self._aggregate.create(
                ResumeCreateInput(
                    data=body.get("data"),
                    meta_code=body.get("meta_code"),
                    title=body.get("title"),
                )
            )
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = _resume_to_dict(resume)
        resp.status = falcon.HTTP_201


class ResumeUploadResource:
    """POST /v1/resumes/upload - ingest a full resume keyed by meta.code."""

    def __init__(self, aggregate: ResumeAggregate) -> None:
        self._aggregate = aggregate

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Accept raw resume JSON or { title?, data: {...} }."""
        body = await req.get_media()
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Body must be a JSON object"}
            return

        wrapped = body.get("data")
        if isinstance(wrapped, dict) and ("meta" in wrapped or "basics" in wrapped):
            data, title = wrapped, body.get("title")
        elif "meta" in body or "basics" in body:
            data, title = body, None
        else:
            resp.status = falcon.HTTP_400
            resp.media = {
                "error": 'Invalid payload. Expected a resume JSON with at least "meta" or '
                '"basics" fields, or wrap it as { data: { ... } }.'
            }
            return

        try:
            result = await self._aggregate.ingest(data, title=title)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "action": "created" if result.created else "updated",
            "applied": result.applied,
            "resume_id": str(result.resume_id),
            "version_number": result.version_number,
            "created": result.created,
            "resume": _resume_to_dict(result.resume),
        }
        resp.status = falcon.HTTP_201 if result.created else falcon.HTTP_200


class ResumeResource:
    """GET/PUT/PATCH/DELETE /v1/resumes/{resume_id}."""

    def __init__(
        self,
        aggregate: ResumeAggregate,
        get_resume: GetResumeUseCase,
        delete_resume: DeleteResumeUseCase,
        list_versions: ListVersionsUseCase,
    ) -> None:
        self._aggregate = aggregate
        self._get_resume = get_resume
        self._delete_resume = delete_resume
        self._list_versions = list_versions

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resume_id: str
    ) -> None:
        """Get resume with its live data. ?versions=true adds the history."""
        rid = _parse_resume_id(resume_id)
        if not rid:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resume ID"}
            return
        try:
            resume = await self._get_resume.execute(rid)
            versions = None
            if req.get_param_as_bool("versions"):
                versions = await self._list_versions.execute(rid)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        out = _resume_to_dict(resume)
        if versions is not None:
            out["versions"] = [_summary_to_dict(v) for v in versions]
        resp.media = out
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resume_id: str
    ) -> None:
        """Full replace: { data, title?, meta_code? }. New version only on change."""
        rid = _parse_resume_id(resume_id)
        if not rid:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resume ID"}
            return
        body = await req.get_media()
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Body must be a JSON object"}
            return

        try:
            result = await self._aggregate.replace(
                rid,
                body.get("data"),
                title=body.get("title"),
                meta_code=body.get("meta_code"),
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
            "applied": result.applied,
            "no_change": result.no_change,
            "new_version": result.new_version,
            "changed_sections": list(result.changed_sections),
            "resume": _resume_to_dict(result.resume),
        }
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resume_id: str
    ) -> None:
        """Section merge: { section, value } | { sections } | { title }. No version."""
        rid = _parse_resume_id(resume_id)
        if not rid:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resume ID"}
            return
        body = await req.get_media()
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Body must be a JSON object"}
            return

        section = body.get("section")
        if section is not None and not isinstance(section, str):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "section must be a string"}
            return
        if section and "value" in body:
            sections = {section: body["value"]}
        else:
            sections = body.get("sections")

        try:
            result = await self._aggregate.partial_update(
                rid, sections, title=body.get("title")
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
            "applied": result.applied,
            "resume": _resume_to_dict(result.resume),
        }
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resume_id: str
    ) -> None:
        """Delete resume and all of its versions and generation jobs."""
        rid = _parse_resume_id(resume_id)
        if not rid:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resume ID"}
            return
        try:
            resume = await self._delete_resume.execute(rid)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        resp.media = {
            "message": f'Resume "{resume.title}" and all associated data deleted.'
        }
        resp.status = falcon.HTTP_200
