"""Process context.

Everything a simulation shares process-wide (configuration and the random
source) travels in one explicit object handed to constructors.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional

from evovac.config import SimulationConfig, validate_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameContext:
    """Shared configuration and RNG.

    Attributes:
        config: Complete simulation configuration.
        rng: Random source; seeding it makes a run reproducible.
    """

    config: SimulationConfig
    rng: random.Random

    @property
    def seed(self) -> Optional[int]:
        return self.config.seed


def create_context(config: Optional[SimulationConfig] = None, seed: Optional[int] = None) -> GameContext:
    """Build a context, logging configuration diagnostics as warnings.

    ``seed`` overrides ``config.seed`` when given.
    """
    config = config or SimulationConfig()
    if seed is not None:
        config = replace(config, seed=seed)
    for problem in validate_config(config):
        logger.warning("Config: %s", problem)
    return GameContext(config=config, rng=random.Random(config.seed))
