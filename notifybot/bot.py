"""NotifyBot: wires presence tracking, notifications and the IRC session."""

from __future__ import annotations

from typing import Any

from .config import BotConfig
from .irc import PresencePoller, ProtocolDispatcher, ReconnectSupervisor
from .irc.protocols import TransportFactory
from .irc.transport import SessionTransport
from .logging_config import error_aggregator
from .notify import Notifier, build_alerts
from .presence import PresenceTable


class NotifyBot:
    """One bot process: a presence table that outlives every session."""

    def __init__(
        self,
        config: BotConfig,
        *,
        notifier: Notifier | None = None,
        transport_factory: TransportFactory = SessionTransport.open,
        **supervisor_options: Any,
    ) -> None:
        self.config = config
        self.table = PresenceTable(config.nicknames)
        self.alerts = build_alerts(config, notifier)
        self.poller = PresencePoller(config.nicknames, config.poll_interval)
        self.dispatcher = ProtocolDispatcher(config, self.table, self.alerts, self.poller)
        self.supervisor = ReconnectSupervisor(
            config,
            self.dispatcher,
            transport_factory=transport_factory,
            **supervisor_options,
        )

    async def run(self) -> None:
        await self.supervisor.run()

    async def shutdown(self) -> None:
        await self.supervisor.shutdown()

    def get_health_snapshot(self) -> dict[str, Any]:
        snapshot = self.supervisor.get_health_snapshot()
        snapshot["online"] = self.table.online_peers()
        snapshot["notifications"] = {
            "delivered": self.alerts.delivered,
            "failed": self.alerts.failed,
        }
        snapshot["errors"] = error_aggregator.counts()
        return snapshot
