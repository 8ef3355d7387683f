import numpy as np

from protoverses.util.constants import ECCENTRICITY_COEFF


class RandomSource:
    """
    Seeded source of the random draws used while building a system.

    Every stochastic choice in the engine goes through one of these so a
    system is reproducible from its seed. Systems built from different
    RandomSource objects share no state.
    """

    def __init__(self, seed=None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def __repr__(self):
        return f"{type(self).__name__}(seed={self.seed})"

    def uniform(self, low, high):
        """
        Uniform draw between two bounds, given in either order
        Args:
            low (float):
                One bound of the interval
            high (float):
                The other bound of the interval
        Returns:
            float:
                The draw, or the bound itself when both bounds are equal
        """
        if low == high:
            return low
        if low > high:
            low, high = high, low
        return float(self.rng.uniform(low, high))

    def jitter(self, value, variation):
        """Return value perturbed by up to +/- variation (as a fraction)."""
        return value + value * self.uniform(-variation, variation)

    def eccentricity(self):
        # Strongly biased toward near-circular orbits, max ~0.51
        return 1.0 - self.uniform(0.0001, 1.0) ** ECCENTRICITY_COEFF

    def spawn(self, n):
        """
        Create n independent child sources, e.g. one per system of a universe
        """
        if isinstance(self.seed, np.random.SeedSequence):
            seq = self.seed
        else:
            seq = np.random.SeedSequence(self.seed)
        return [RandomSource(seed) for seed in seq.spawn(n)]
