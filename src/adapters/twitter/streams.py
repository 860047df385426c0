"""Endpoints del stream filtrado (reglas) y del sample stream."""

from __future__ import annotations

import httpx

from adapters.twitter._base import TwitterClientBase
from adapters.twitter.stream import TweetStream
from core.domain.models import RateLimit, StreamRule, StreamRulesResponse
from core.domain.options import StreamOptions
from core.errors import ParameterError

STREAM_MAX_BACKFILL_MINUTES = 5


def _dry_run_params(dry_run: bool) -> dict[str, str]:
    return {"dry_run": "true"} if dry_run else {}


class StreamsMixin(TwitterClientBase):
    # --- reglas --------------------------------------------------------------------

    async def tweet_search_stream_rules(
        self, rule_ids: list[str] | None = None
    ) -> StreamRulesResponse:
        """Reglas activas del stream filtrado (todas, o solo `rule_ids`)."""

        params: dict[str, str] = {}
        if rule_ids:
            if any(not rule_id for rule_id in rule_ids):
                raise ParameterError("tweet search rule id is required")
            params["ids"] = ",".join(rule_ids)
        return await self._call(
            "tweet search stream rules",
            "GET",
            self._url("tweets", "search", "stream", "rules"),
            StreamRulesResponse,
            params=params,
        )

    async def tweet_search_stream_add_rules(
        self, rules: list[StreamRule], dry_run: bool = False
    ) -> StreamRulesResponse:
        """Crea reglas. Con `dry_run` la API solo las valida."""

        if not rules:
            raise ParameterError("tweet search stream add rule: rules are required")
        add: list[dict[str, str]] = []
        for rule in rules:
            if not rule.value:
                raise ParameterError("tweet search stream rule value is required")
            entry = {"value": rule.value}
            if rule.tag:
                entry["tag"] = rule.tag
            add.append(entry)
        return await self._call(
            "tweet search stream add rule",
            "POST",
            self._url("tweets", "search", "stream", "rules"),
            StreamRulesResponse,
            params=_dry_run_params(dry_run),
            json={"add": add},
            expected=201,
        )

    async def tweet_search_stream_delete_rules(
        self,
        *,
        ids: list[str] | None = None,
        values: list[str] | None = None,
        dry_run: bool = False,
    ) -> StreamRulesResponse:
        """Borra reglas por id o por valor (exactamente uno de los dos)."""

        if bool(ids) == bool(values):
            raise ParameterError(
                "tweet search stream delete rule: rule ids or rule values are required"
            )
        if ids:
            if any(not rule_id for rule_id in ids):
                raise ParameterError("tweet search rule id is required")
            delete = {"ids": list(ids)}
        else:
            delete = {"values": list(values or [])}
        return await self._call(
            "tweet search stream delete rule",
            "POST",
            self._url("tweets", "search", "stream", "rules"),
            StreamRulesResponse,
            params=_dry_run_params(dry_run),
            json={"delete": delete},
        )

    # --- streams ---------------------------------------------------------------------

    async def tweet_search_stream(self, opts: StreamOptions | None = None) -> TweetStream:
        """Abre el stream filtrado por las reglas activas."""

        return await self._open_stream(
            "tweet search stream", self._url("tweets", "search", "stream"), opts
        )

    async def tweet_sample_stream(self, opts: StreamOptions | None = None) -> TweetStream:
        """Abre el sample stream (~1% de los tweets públicos)."""

        return await self._open_stream(
            "tweet sample stream", self._url("tweets", "sample", "stream"), opts
        )

    async def _open_stream(
        self, name: str, url: str, opts: StreamOptions | None
    ) -> TweetStream:
        opts = opts or StreamOptions()
        if opts.backfill_minutes > STREAM_MAX_BACKFILL_MINUTES:
            raise ParameterError(
                f"{name}: a max back off minutes [{STREAM_MAX_BACKFILL_MINUTES}] "
                f"is [current: {opts.backfill_minutes}]"
            )

        timeout = httpx.Timeout(
            self._settings.http_timeout_seconds,
            read=self._settings.stream_timeout_seconds,
        )
        response = await self._send(
            "GET", url, params=opts.to_params(), stream=True, timeout=timeout
        )
        rate_limit = RateLimit.from_headers(response.headers)

        if response.status_code != 200:
            try:
                await response.aread()
            finally:
                await response.aclose()
            raise self._error_from_response(response, rate_limit)

        return TweetStream(
            response,
            rate_limit=rate_limit,
            keep_alive_timeout=self._settings.stream_keep_alive_seconds,
        )
