"""Dynamic controller factory for relation history summaries."""

from collections.abc import Iterable
from typing import Annotated, Any

from litestar import Controller, get
from litestar.params import Parameter
from sqlalchemy.ext.asyncio import AsyncSession

from wikirev.db.models import RevType
from wikirev.db.services import revision_service
from wikirev.db.services.revision_service import DEFAULT_LIMIT, MAX_LIMIT


def create_relation_history_controller(
    controller_path: str,
    route: str,
    operation_id: str,
    summary: str,
    rev_types: Iterable[RevType],
) -> type[Controller]:
    """Create a Controller serving one paged history-summary endpoint.

    ``route`` must contain a ``{target_id:int}`` segment naming the entity
    whose history is listed, e.g. ``/{target_id:int}/subjects/history-summary``.
    Only revisions whose type is in ``rev_types`` are listed.
    """
    types = tuple(rev_types)

    class _RelationHistoryController(Controller):
        path = controller_path
        tags = ["wiki"]

        @get(route, operation_id=operation_id, summary=summary)
        async def history_summary(
            self,
            db_session: AsyncSession,
            target_id: Annotated[int, Parameter(ge=1)],
            limit: Annotated[int, Parameter(ge=1, le=MAX_LIMIT, description="max 100")] = DEFAULT_LIMIT,
            offset: Annotated[int, Parameter(ge=0, description="min 0")] = 0,
        ) -> dict[str, Any]:
            page = await revision_service.query_relation_history(
                db_session, target_id, types, limit=limit, offset=offset
            )
            return page.to_dict()

    name = f"{operation_id[:1].upper()}{operation_id[1:]}Controller"
    _RelationHistoryController.__name__ = name
    _RelationHistoryController.__qualname__ = name

    return _RelationHistoryController
