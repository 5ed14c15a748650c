"""Version history API resources."""

from uuid import UUID

import falcon.asgi

from resumevault.application.services import RollbackCoordinator, SnapshotResolver
from resumevault.application.use_cases.version.get_version import GetVersionUseCase
from resumevault.application.use_cases.version.list_versions import ListVersionsUseCase
from resumevault.domain.exceptions import NotFound, ValidationError
from resumevault.interfaces.api.resources.resumes import _resume_to_dict, _summary_to_dict


def parse_version_number(raw: object) -> int | None:
    """Positive integer from a path segment or JSON value, None when invalid."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, float):
        if not raw.is_integer():
            return None
        raw = int(raw)
    try:
        number = int(raw)
    except (TypeError, ValueError):
        return None
    return number if number >= 1 else None


class VersionsResource:
    """GET /v1/resumes/{id}/versions - history; POST - rollback."""

    def __init__(
        self,
        list_versions: ListVersionsUseCase,
        rollback_coordinator: RollbackCoordinator,
    ) -> None:
        self._list_versions = list_versions
        self._rollback = rollback_coordinator

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resume_id: str
    ) -> None:
        """List versions newest first, without snapshot data."""
        try:
            rid = UUID(resume_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resume ID"}
            return
        try:
            versions = await self._list_versions.execute(rid)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        resp.media = {"items": [_summary_to_dict(v) for v in versions]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resume_id: str
    ) -> None:
        """Roll back: { version_number } becomes a new forward version."""
        try:
            rid = UUID(resume_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resume ID"}
            return
        body = await req.get_media()
        raw = body.get("version_number") if isinstance(body, dict) else None
        target = parse_version_number(raw)
        if target is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing or invalid version_number in body"}
            return

        try:
            result = await self._rollback.rollback(rid, target)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "message": f"Rolled back to v{target}. Created as new v{result.new_version}.",
            "new_version": result.new_version,
            "changed_sections": list(result.changed_sections),
            "resume": _resume_to_dict(result.resume),
        }
        resp.status = falcon.HTTP_200


class VersionResource:
    """GET /v1/resumes/{id}/versions/{n} (full version) and .../snapshot."""

    def __init__(
        self,
        get_version: GetVersionUseCase,
        snapshot_resolver: SnapshotResolver,
    ) -> None:
        self._get_version = get_version
        self._snapshot_resolver = snapshot_resolver

    def _parse(self, resume_id: str, version_number: str) -> tuple[UUID, int] | None:
        try:
            rid = UUID(resume_id)
        except ValueError:
            return None
        number = parse_version_number(version_number)
        return (rid, number) if number is not None else None

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resume_id: str,
        version_number: str,
    ) -> None:
        """Get one version including its data."""
        parsed = self._parse(resume_id, version_number)
        if not parsed:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resume ID or version number"}
            return
        try:
            version = await self._get_version.execute(*parsed)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        resp.media = {**_summary_to_dict(version), "data": version.data}
        resp.status = falcon.HTTP_200

    async def on_get_snapshot(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resume_id: str,
        version_number: str,
    ) -> None:
        """Exact section map to render for (resume, version)."""
        parsed = self._parse(resume_id, version_number)
        if not parsed:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resume ID or version number"}
            return
        try:
            data = await self._snapshot_resolver.resolve(*parsed)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        resp.media = {"version_number": parsed[1], "data": data}
        resp.status = falcon.HTTP_200
