"""
Router that derives its OpenAPI tag from where it is mounted.
"""
from fastapi import APIRouter


class TaggedAPIRouter(APIRouter):
    """
    APIRouter whose docs tag is its parents' tags joined with its own.

    ``TaggedAPIRouter(prefix="/generate", tag="Generate code")`` included
    under ``TaggedAPIRouter(prefix="/api")`` is listed as
    ``/api/Generate code``. Without ``tag`` the prefix is used as the segment.
    """

    def __init__(self, *, prefix: str = '', tag: str | None = None, **kwargs) -> None:
        segment = prefix if tag is None else '/' + tag.lstrip('/')
        self._tag_segment: str = segment
        self._full_tag: str = segment
        if 'tags' not in kwargs and segment:
            kwargs['tags'] = [segment]
        super().__init__(prefix=prefix, **kwargs)

    def include_router(self, router: APIRouter, **kwargs) -> None:
        if isinstance(router, TaggedAPIRouter):
            router._full_tag = self._full_tag + router._tag_segment
            if router.tags:
                router.tags = [router._full_tag]
        super().include_router(router, **kwargs)
