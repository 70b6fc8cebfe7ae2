"""Resolution engine: walks a ``$ref`` document graph into an alias table.

Starting from a root reference, every document reachable through ``$ref``
pointers is fetched and parsed exactly once and stored under a generated
alias. Inner pointers are rewritten in place to ``<alias>#/<fragment>``.
The start document is always stored under ``"root"``.

Usage:
    >>> documents = await resolve("https://x.test/schemas/a.json")
    >>> documents["root"]["properties"]["b"]["$ref"]
    '3f2a9c0d81be#/defs/Foo'
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine

import httpx

from schema_deref import fetchers
from schema_deref.content import parse_content
from schema_deref.exceptions import NotRootError, ParseError
from schema_deref.naming import fresh_name
from schema_deref.refs import RefKind, Reference, combine_refs, parse_ref, render_ref

logger = logging.getLogger("schema-deref.resolver")

ROOT_ALIAS = "root"

Fetcher = Callable[[str], Awaitable[str]]
ContentParser = Callable[[str], Any]
NameGenerator = Callable[[], str]

AliasMapping = dict[str, str]
ResolvedTable = dict[str, asyncio.Task[Any]]


def assign_alias(
    location: str,
    mapping: AliasMapping,
    name_generator: NameGenerator = fresh_name,
) -> str:
    """Return the alias for ``location``, generating one on first sight."""
    alias = mapping.get(location)
    if alias is None:
        alias = name_generator()
        mapping[location] = alias
        logger.debug("Assigned alias %s to %s", alias, location)
    return alias


class ResolutionSession:
    """State for one top-level resolution.

    Owns the alias mapping and the resolved table so concurrent
    ``resolve`` calls never share state. Collaborators default to the
    package fetchers, parser and name generator; tests inject their own.
    """

    def __init__(
        self,
        root: Reference,
        *,
        fetch_web: Fetcher | None = None,
        fetch_file: Fetcher | None = None,
        parse: ContentParser | None = None,
        name_generator: NameGenerator | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.root = root
        self.mapping: AliasMapping = {}
        self.resolved: ResolvedTable = {}

        self._web_fetcher = fetch_web
        self._file_fetcher = fetch_file or fetchers.fetch_file
        self._parse = parse or parse_content
        self._name_generator = name_generator or fresh_name
        self._http_client = http_client
        self._owns_http_client = False
        self._tasks: list[asyncio.Task[Any]] = []
        self._walked: set[int] = set()

    def assign_alias(self, location: str) -> str:
        return assign_alias(location, self.mapping, self._name_generator)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.ensure_future(coro)
        self._tasks.append(task)
        return task

    async def _fetch_web(self, location: str) -> str:
        if self._web_fetcher is not None:
            return await self._web_fetcher(location)
        if self._http_client is None:
            self._http_client = fetchers.create_http_client()
            self._owns_http_client = True
        return await fetchers.fetch_web(location, self._http_client)

    async def retrieve_root(self, ref: Reference) -> Any:
        """Fetch and parse the document a root reference points at.

        Raises:
            RetrievalError: The fetch failed.
            ParseError: The content is neither JSON nor YAML.
        """
        assert ref.location is not None
        if ref.kind == RefKind.WEB:
            text = await self._fetch_web(ref.location)
        else:
            text = await self._file_fetcher(ref.location)

        try:
            return self._parse(text)
        except ParseError as exc:
            if exc.location is None:
                raise ParseError(exc.reason, ref.location) from exc
            raise

    async def walk_inner(self, current_root: Reference, node: Any) -> None:
        """Rewrite and follow every ``$ref`` inside ``node``.

        ``current_root`` is the document ``node`` belongs to; relative
        pointers are combined against it.
        """
        if not isinstance(node, (dict, list)):
            return

        # YAML anchors share one object between sites; rewrite it only once.
        if id(node) in self._walked:
            return
        self._walked.add(id(node))

        if isinstance(node, list):
            await self._walk_all(current_root, node)
            return

        pointer = node.get("$ref")
        if isinstance(pointer, str):
            next_root = combine_refs(current_root, pointer)
            assert next_root.location is not None
            alias = self.assign_alias(next_root.location)
            node["$ref"] = render_ref(Reference(location=alias, fragment=next_root.fragment))
            await self.resolve_root(next_root)
            return

        await self._walk_all(current_root, list(node.values()))

    async def _walk_all(self, current_root: Reference, nodes: list[Any]) -> None:
        children = [child for child in nodes if isinstance(child, (dict, list))]
        if not children:
            return
        await asyncio.gather(*(self._spawn(self.walk_inner(current_root, child)) for child in children))

    async def resolve_root(self, ref: Reference) -> None:
        """Retrieve ``ref`` once and walk everything it references.

        Returns immediately when the location already has an entry in the
        resolved table, which is what breaks cycles.

        Raises:
            NotRootError: ``ref`` is not a root reference.
        """
        if not ref.is_root:
            raise NotRootError(render_ref(ref), f"Cannot resolve a non-root reference: {render_ref(ref)!r}")

        assert ref.location is not None
        alias = self.assign_alias(ref.location)
        if alias in self.resolved:
            logger.debug("Already resolving %s as %s", ref.location, alias)
            return

        # No await between the membership check and registration.
        retrieval = self._spawn(self.retrieve_root(ref))
        self.resolved[alias] = retrieval

        content = await retrieval
        await self.walk_inner(ref, content)

    async def run(self) -> dict[str, Any]:
        """Resolve from the session root and return the alias table.

        Any error aborts the whole traversal: in-flight work is cancelled
        and the error propagates.
        """
        if self.root.location:
            self.mapping[self.root.location] = ROOT_ALIAS

        try:
            await self.resolve_root(self.root)
            aliases = list(self.resolved)
            documents = await asyncio.gather(*self.resolved.values())
        except BaseException:
            await self._cancel_pending()
            raise
        finally:
            await self._close_http_client()

        logger.info("Resolved %d document(s) from %s", len(aliases), render_ref(self.root))
        return dict(zip(aliases, documents))

    async def _cancel_pending(self) -> None:
        for task in self._tasks:
            if not task.done():
                task.cancel()
        # Collects outcomes so failed siblings are not reported as unretrieved.
        await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _close_http_client(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            client = self._http_client
            self._http_client = None
            self._owns_http_client = False
            await client.aclose()


async def resolve(
    ref: str | Reference,
    *,
    fetch_web: Fetcher | None = None,
    fetch_file: Fetcher | None = None,
    parse: ContentParser | None = None,
    name_generator: NameGenerator | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Dereference ``ref`` and return every reached document by alias.

    Args:
        ref: Root reference, as text or structured.
        fetch_web: Replacement for the httpx-backed web fetcher.
        fetch_file: Replacement for the local file reader.
        parse: Replacement for the JSON/YAML content parser.
        name_generator: Replacement for the alias generator.
        http_client: Client for the default web fetcher. Not closed here.

    Raises:
        NotRootError: ``ref`` is relative or fragment-only.
        RetrievalError: Any reachable document could not be fetched.
        ParseError: Any reachable document could not be parsed.
    """
    root = parse_ref(ref) if isinstance(ref, str) else ref
    session = ResolutionSession(
        root,
        fetch_web=fetch_web,
        fetch_file=fetch_file,
        parse=parse,
        name_generator=name_generator,
        http_client=http_client,
    )
    return await session.run()
