from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from modelhub.core.exceptions import ProviderUnavailableError
from modelhub.models.chat import ChatMessage

logger = logging.getLogger(__name__)


class ProviderAdapter(Protocol):
    provider_name: str

    async def generate_reply(self, messages: list[ChatMessage], model: str) -> str: ...


@dataclass(frozen=True)
class ProviderRegistry:
    """Provider handles built once at startup and shared by every request."""

    gemini: ProviderAdapter
    openai: ProviderAdapter
    coder: ProviderAdapter
    default: ProviderAdapter
    coder_model: str
    backup_model: str


@dataclass(frozen=True)
class RouteRule:
    name: str
    matches: Callable[[str], bool]
    adapter: ProviderAdapter


def unreachable_message(model: str) -> str:
    return f"Model {model} is currently unreachable. Please try a different model."


class ProviderRouter:
    """Picks exactly one adapter per request from an ordered rule table."""

    def __init__(
        self,
        rules: Sequence[RouteRule],
        default: ProviderAdapter,
        backup_model: str,
    ):
        self._rules = tuple(rules)
        self._default = default
        self._backup_model = backup_model

    @classmethod
    def from_registry(cls, registry: ProviderRegistry) -> ProviderRouter:
        coder_model = registry.coder_model
        rules = [
            RouteRule("gemini", lambda m: m.startswith("gemini"), registry.gemini),
            RouteRule("openai", lambda m: m.startswith("gpt"), registry.openai),
            RouteRule("coder", lambda m: m == coder_model, registry.coder),
        ]
        return cls(rules, default=registry.default, backup_model=registry.backup_model)

    @property
    def rules(self) -> tuple[RouteRule, ...]:
        return self._rules

    def select(self, model: str) -> ProviderAdapter:
        for rule in self._rules:
            if model and rule.matches(model):
                return rule.adapter
        return self._default

    async def generate_reply(self, messages: list[ChatMessage], model: str) -> str:
        adapter = self.select(model)
        logger.info(
            "Dispatching chat: model=%s provider=%s messages=%d",
            model, adapter.provider_name, len(messages),
        )
        return await self._call(adapter, messages, model, requested=model)

    async def generate_backup_reply(self, messages: list[ChatMessage], model: str) -> str:
        """Serve the request from the default provider only.

        Models that the default provider does not host are swapped for the
        configured backup model, as is a missing model.
        """
        if model and self.select(model) is self._default:
            upstream_model = model
        else:
            upstream_model = self._backup_model
        logger.info(
            "Dispatching backup chat: requested=%s model=%s provider=%s",
            model, upstream_model, self._default.provider_name,
        )
        return await self._call(self._default, messages, upstream_model, requested=model)

    async def _call(
        self,
        adapter: ProviderAdapter,
        messages: list[ChatMessage],
        model: str,
        requested: str,
    ) -> str:
        try:
            return await adapter.generate_reply(messages, model)
        except Exception as e:
            logger.exception(
                "Provider call failed: provider=%s model=%s",
                adapter.provider_name, model,
            )
            raise ProviderUnavailableError(unreachable_message(requested)) from e
