"""Tip generation service with a deterministic local fallback"""
import asyncio
import logging
from typing import Optional

from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI

from workday_zen.config import GOOGLE_API_KEY, TIP_MODEL, TIP_TEMPERATURE
from .fallback_content import get_fallback_tip
from .models.productivity_tip import ProductivityTip, TipLookupResult
from .prompts.tip_prompt import prompt_template

logger = logging.getLogger(__name__)


class TipService:
    """Looks up a tip from Gemini; every failure becomes a fallback result."""

    def __init__(
        self,
        api_key: Optional[str] = GOOGLE_API_KEY,
        model: str = TIP_MODEL,
        temperature: float = TIP_TEMPERATURE,
        structured_llm: Optional[Runnable] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._structured_llm = structured_llm

    @property
    def has_credential(self) -> bool:
        return bool(self._api_key) or self._structured_llm is not None

    def _get_structured_llm(self) -> Runnable:
        if self._structured_llm is None:
            llm = ChatGoogleGenerativeAI(
                model=self._model,
                temperature=self._temperature,
                google_api_key=self._api_key,
            )
            self._structured_llm = llm.with_structured_output(ProductivityTip)
        return self._structured_llm

    async def lookup(self, remaining_hours: float) -> TipLookupResult:
        """
        Ask the model for a tip.

        Args:
            remaining_hours: Hours left in the session

        Returns:
            TipLookupResult carrying the tip, or use_fallback=True on any failure
            (no credential, network error, malformed response)
        """
        if not self.has_credential:
            logger.info("No tip credential configured, using fallback tip")
            return TipLookupResult.fallback()

        try:
            result = await (prompt_template | self._get_structured_llm()).ainvoke({
                "remaining_hours": f"{remaining_hours:.1f}",
            })
            if not isinstance(result, ProductivityTip):
                raise ValueError(f"Malformed tip response: {result!r}")

            logger.info(f"Generated tip: {result.title}")
            return TipLookupResult(tip=result)

        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Error generating workday tip: {e}")
            return TipLookupResult.fallback()

    async def get_workday_tip(self, remaining_hours: float) -> ProductivityTip:
        """Resolve a lookup to a tip; the caller never observes a failure."""
        result = await self.lookup(remaining_hours)
        if result.use_fallback or result.tip is None:
            return get_fallback_tip()
        return result.tip


class TipProvider:
    """
    Keeps the latest tip and refreshes it in the background.

    A refresh cancels the previous in-flight fetch; it never blocks a transition.
    """

    def __init__(self, service: TipService):
        self._service = service
        self._current: Optional[ProductivityTip] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def current_tip(self) -> Optional[ProductivityTip]:
        return self._current

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def refresh(self, remaining_hours: float) -> asyncio.Task:
        if self.pending:
            self._task.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fetch(remaining_hours))
        return self._task

    async def wait(self) -> Optional[ProductivityTip]:
        """Wait for the in-flight refresh, if any"""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        return self._current

    async def close(self) -> None:
        if self.pending:
            self._task.cancel()
        await self.wait()

    async def _fetch(self, remaining_hours: float) -> None:
        self._current = await self._service.get_workday_tip(remaining_hours)
