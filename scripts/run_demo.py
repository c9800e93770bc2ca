"""Run a short simulated game loop built from the helpers."""

from __future__ import annotations

import asyncio
from typing import Callable, Hashable, List

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

from gsu.algo.collections import filter_items, insert_if_absent, transform
from gsu.algo.sampling import weighted_value
from gsu.config import GsuConfig, configure
from gsu.session.registry import SessionRegistry, session_duration
from gsu.timing.debounce import debounce
from gsu.timing.every import every
from gsu.timing.scheduler import AsyncioScheduler
from gsu.timing.throttle import throttle
from gsu.utils.logging import logger


class DemoHost:
    """Stand-in for the engine's player service."""

    def __init__(self):
        self.players: List[str] = []
        self._started: List[Callable[[Hashable], object]] = []
        self._ended: List[Callable[[Hashable], object]] = []

    def sessions(self) -> List[str]:
        return list(self.players)

    def connect_session_started(self, callback: Callable[[Hashable], object]) -> None:
        self._started.append(callback)

    def connect_session_ended(self, callback: Callable[[Hashable], object]) -> None:
        self._ended.append(callback)

    def join(self, name: str) -> None:
        if insert_if_absent(self.players, name):
            for cb in self._started:
                cb(name)

    def leave(self, name: str) -> None:
        if name in self.players:
            self.players.remove(name)
            for cb in self._ended:
                cb(name)


async def run(cfg: DictConfig) -> None:
    scheduler = AsyncioScheduler()
    host = DemoHost()
    registry = SessionRegistry(clock=scheduler.now).attach(host)
    loot = [tuple(entry) for entry in cfg.demo.loot]

    announce = throttle(lambda msg: logger.info("announce: {msg}", msg=msg), cfg.timing.throttle_cooldown, scheduler)
    save = debounce(lambda names: logger.info("saved roster {names}", names=names), cfg.timing.debounce_delay, scheduler)

    def tick(elapsed: float) -> None:
        veterans = filter_items(host.players, lambda p: session_duration(registry, p) >= 2.0)
        drops = transform(veterans, lambda p: f"{p}:{weighted_value(loot)}")
        logger.info("tick {elapsed:.2f}s players={players} drops={drops}", elapsed=elapsed, players=host.players, drops=drops)
        if drops:
            announce(f"{len(drops)} loot drops")

    ticker = every(cfg.timing.tick_interval, tick, scheduler)
    try:
        for name in cfg.demo.players:
            host.join(name)
            save(list(host.players))
            await scheduler.wait(0.3)
        await scheduler.wait(cfg.demo.duration / 2)
        host.leave(cfg.demo.players[0])
        save(list(host.players))
        await scheduler.wait(cfg.demo.duration / 2)
    finally:
        ticker.cancel()
        save.flush()
        registry.clear()


def build_settings(cfg: DictConfig) -> DictConfig:
    """Validate the hydra config against the schema and pin file paths."""

    settings = OmegaConf.merge(OmegaConf.structured(GsuConfig), cfg)
    # hydra changes CWD to outputs/..., keep relative log paths next to the launch dir
    if settings.logging.file:
        settings.logging.file = to_absolute_path(settings.logging.file)
    return settings


@hydra.main(config_path="../configs", config_name="demo", version_base=None)
def main(cfg: DictConfig) -> None:
    settings = build_settings(cfg)
    configure(settings)
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down demo loop")


if __name__ == "__main__":
    main()
