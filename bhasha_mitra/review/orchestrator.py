"""One full proofreading check of the current document.

A check resets the store, fans out four provider branches with staggered
starts, waits for all of them to settle, ingests what came back and issues a
single batched highlight for the spelling, tone and style suggestions.

Branch timing::

    t=0.0  main      spelling, punctuation, euphony, style mixing
    t=0.2  tone      only when a tone is selected
    t=0.4  style     only when a style other than "none" is selected
    t=0.6  content   always

The stagger spreads provider load without serialising the branches: a slow
branch never delays the dispatch of the others. A failing branch degrades to
an empty result; no branch is retried and none is cancelled by the core.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Mapping

from ..document.adapter import DocumentAdapter, HighlightItem
from ..llm.provider import (
    DEFAULT_MODEL,
    BranchReporter,
    LLMProviderError,
    ProviderRequest,
    SuggestionProvider,
)
from ..models import Branch, BranchStatus, DocType, LanguageStyle, Stats, SuggestionCategory
from .store import SuggestionStore, highlight_item

LOGGER = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class CheckRefusedError(Exception):
    """Raised when a check cannot start; nothing has been touched."""


class MissingCredentialError(CheckRefusedError):
    """No API key is configured."""


class EmptyDocumentError(CheckRefusedError):
    """Neither the selection nor the document contains any text."""


class CheckInProgressError(RuntimeError):
    """Raised when a check is started while another one is running."""


@dataclass(frozen=True)
class StaggerSchedule:
    """Seconds to wait before each branch issues its provider request."""

    main: float = 0.0
    tone: float = 0.2
    style: float = 0.4
    content: float = 0.6

    def delay_for(self, branch: Branch) -> float:
        return getattr(self, branch.value)


@dataclass(frozen=True)
class CheckResult:
    """Summary of a completed check."""

    stats: Stats
    branch_statuses: Mapping[Branch, BranchStatus]
    highlighted_items: tuple[HighlightItem, ...] = field(default_factory=tuple)


# Categories filled from each branch's response, keyed by response field
_BRANCH_FIELDS: dict[Branch, dict[str, SuggestionCategory]] = {
    Branch.MAIN: {
        "spellingErrors": SuggestionCategory.SPELLING,
        "punctuationIssues": SuggestionCategory.PUNCTUATION,
        "euphonyImprovements": SuggestionCategory.EUPHONY,
        "languageStyleMixing": SuggestionCategory.MIXING,
    },
    Branch.TONE: {"toneConversions": SuggestionCategory.TONE},
    Branch.STYLE: {"styleConversions": SuggestionCategory.STYLE},
}

# Categories held as a single record rather than a list
_RECORD_CATEGORIES = (SuggestionCategory.MIXING, SuggestionCategory.CONTENT)

# Categories included in the post-check batch highlight, in paint order.
# Punctuation, euphony and mixing only show on hover.
_BATCH_HIGHLIGHT_CATEGORIES = (
    SuggestionCategory.SPELLING,
    SuggestionCategory.TONE,
    SuggestionCategory.STYLE,
)


class CheckOrchestrator:
    """Runs check cycles against one document, provider and store."""

    def __init__(
        self,
        adapter: DocumentAdapter,
        provider: SuggestionProvider,
        store: SuggestionStore,
        *,
        stagger: StaggerSchedule | None = None,
        sleep: Sleep = asyncio.sleep,
        reporter: BranchReporter | None = None,
    ) -> None:
        self._adapter = adapter
        self._provider = provider
        self._store = store
        self._stagger = stagger or StaggerSchedule()
        self._sleep = sleep
        self._reporter = reporter
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def run_check(
        self,
        credential: str | None,
        *,
        model_id: str = DEFAULT_MODEL,
        doc_type: DocType | str = DocType.GENERIC,
        tone: str | None = None,
        style: LanguageStyle | str | None = None,
        document_text: str | None = None,
    ) -> CheckResult:
        """Run one check cycle.

        When ``document_text`` is None the text is read from the adapter
        (selection first, whole document otherwise).

        Raises:
            MissingCredentialError: If ``credential`` is empty; nothing else is touched
            EmptyDocumentError: If the text to check is blank
            CheckInProgressError: If another check on this orchestrator is running
        """
        if self._running:
            raise CheckInProgressError("A check is already running")
        if not credential or not credential.strip():
            raise MissingCredentialError("An API key is required before checking")

        selected_style = LanguageStyle(style or LanguageStyle.NONE)

        self._running = True
        try:
            if document_text is None:
                document_text = await self._adapter.fetch_text()
            if not document_text.strip():
                raise EmptyDocumentError("Select some text or place the cursor in a document")
            return await self._run_cycle(
                ProviderRequest(
                    document_text=document_text,
                    branch=Branch.MAIN,
                    doc_type=DocType.parse(doc_type),
                    credential=credential.strip(),
                    model_id=model_id or DEFAULT_MODEL,
                    tone=(tone or "").strip() or None,
                    style=selected_style,
                )
            )
        finally:
            self._running = False

    async def _run_cycle(self, base: ProviderRequest) -> CheckResult:
        self._store.reset()
        await self._adapter.clear_all_highlights()

        enabled = {
            Branch.MAIN: True,
            Branch.TONE: base.tone is not None,
            Branch.STYLE: base.style is not LanguageStyle.NONE,
            Branch.CONTENT: True,
        }
        results = await asyncio.gather(
            *(self._run_branch(branch, base, selected) for branch, selected in enabled.items())
        )
        statuses: dict[Branch, BranchStatus] = {}
        for branch, status, payload in results:
            if payload is not None and not self._ingest(branch, payload):
                status = BranchStatus.FAILURE
            statuses[branch] = status

        stats = self._store.recompute_stats(base.document_text)

        items = self._batch_highlight_items()
        if items:
            await self._adapter.batch_highlight(items)

        LOGGER.info(
            "Check finished: %d words, %d spelling error(s), accuracy %d%%, branches %s",
            stats.total_words,
            stats.error_count,
            stats.accuracy,
            {branch.value: status.value for branch, status in statuses.items()},
        )
        return CheckResult(stats=stats, branch_statuses=statuses, highlighted_items=tuple(items))

    async def _run_branch(
        self, branch: Branch, base: ProviderRequest, selected: bool
    ) -> tuple[Branch, BranchStatus, Mapping[str, Any] | None]:
        if not selected:
            # Settles immediately: no stagger, no provider call
            self._report(branch, BranchStatus.EMPTY)
            return branch, BranchStatus.EMPTY, None

        delay = self._stagger.delay_for(branch)
        if delay > 0:
            await self._sleep(delay)

        try:
            payload = await self._provider.suggest(replace(base, branch=branch))
        except LLMProviderError as exc:
            LOGGER.warning("%s branch failed: %s", branch.value, exc)
            self._report(branch, BranchStatus.FAILURE, exc)
            return branch, BranchStatus.FAILURE, None
        except Exception as exc:
            LOGGER.exception("%s branch raised an unexpected error", branch.value)
            self._report(branch, BranchStatus.FAILURE, exc)
            return branch, BranchStatus.FAILURE, None

        if not isinstance(payload, Mapping):
            if payload is not None:
                LOGGER.warning(
                    "%s branch returned %s, expected an object",
                    branch.value,
                    type(payload).__name__,
                )
            self._report(branch, BranchStatus.EMPTY)
            return branch, BranchStatus.EMPTY, None

        self._report(branch, BranchStatus.SUCCESS)
        return branch, BranchStatus.SUCCESS, payload

    def _ingest(self, branch: Branch, payload: Mapping[str, Any]) -> bool:
        """Store one branch's results; on failure clear that branch and return False."""
        fields: dict[str | None, SuggestionCategory]
        if branch is Branch.CONTENT:
            fields = {None: SuggestionCategory.CONTENT}
        else:
            fields = dict(_BRANCH_FIELDS[branch])
        try:
            for field_name, category in fields.items():
                if field_name is None:
                    raw = dict(payload)
                else:
                    raw = payload.get(field_name)
                    if category not in _RECORD_CATEGORIES and raw is None:
                        raw = []
                self._store.ingest(category, raw)
        except Exception as exc:
            LOGGER.exception("%s branch results could not be ingested", branch.value)
            for category in fields.values():
                self._store.ingest(category, None if category in _RECORD_CATEGORIES else [])
            self._report(branch, BranchStatus.FAILURE, exc)
            return False
        return True

    def _batch_highlight_items(self) -> list[HighlightItem]:
        snapshot = self._store.snapshot
        items: list[HighlightItem] = []
        for category in _BATCH_HIGHLIGHT_CATEGORIES:
            for suggestion in getattr(snapshot, category.value):
                items.append(highlight_item(category, suggestion))
        return items

    def _report(self, branch: Branch, status: BranchStatus, error: Exception | None = None) -> None:
        if self._reporter is None:
            return
        self._reporter(branch, status, error)
