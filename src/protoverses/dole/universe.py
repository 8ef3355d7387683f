import logging

from tqdm import tqdm

from protoverses.base.universe import Universe
from protoverses.dole.system import DoleSystem
from protoverses.util.config import resolve_params
from protoverses.util.errors import AccretionError
from protoverses.util.log import setup_logging
from protoverses.util.rng import RandomSource

logger = logging.getLogger(__name__)


def create_universe(universe_params):
    """
    Build a universe of accreted systems
    Args:
        universe_params (dict):
            Generation parameters, see protoverses.util.config.DEFAULT_PARAMS.
            A seed is required.
    Returns:
        DoleUniverse
    """
    params = resolve_params(universe_params)
    if params["log_level"] is not None:
        setup_logging(params["log_level"])
    universe = DoleUniverse(params)
    return universe


class DoleUniverse(Universe):
    """
    Class for a universe of systems built by dust accretion. Every system
    draws from its own RandomSource spawned from the universe seed, so any
    one of them can be rebuilt on its own.
    """

    def __init__(self, params):
        self.type = "Dole"
        self.params = params
        self.seed = params["seed"]
        self.rngs = RandomSource(self.seed).spawn(params["nsystems"])

        self.systems = []
        for i, rng in enumerate(
            tqdm(
                self.rngs,
                desc="Generating systems",
                position=0,
                leave=False,
                disable=not params["show_progress"],
            )
        ):
            try:
                system = DoleSystem(
                    rng, stars=params["stars"], moons=params["moons"], name=f"{i}"
                )
            except AccretionError:
                logger.error(f"Generation of system {i} failed.")
                raise
            self.systems.append(system)

        self.names = [system.star.name for system in self.systems]

        super().__init__()
