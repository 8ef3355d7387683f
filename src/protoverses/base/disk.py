import logging
from dataclasses import dataclass

from protoverses.util.errors import AccretionError

logger = logging.getLogger(__name__)


@dataclass
class DustBand:
    """
    One interval of the protoplanetary cloud with uniform dust/gas content.
    A band without gas is inert, nothing is ever swept from it again.
    """

    inner_edge: float  # AU
    outer_edge: float  # AU
    dust_present: bool = True
    gas_present: bool = True

    @property
    def width(self):
        return self.outer_edge - self.inner_edge

    @property
    def gas_only(self):
        return self.gas_present and not self.dust_present

    def same_content(self, other):
        return (
            self.dust_present == other.dust_present
            and self.gas_present == other.gas_present
        )


class DustCloud:
    """
    The dust and gas disk around a star (or a planet when building moons).

    The bands always partition [inner, outer]: consecutive bands touch, none
    overlap, and none has zero width.
    """

    def __init__(self, inner, outer):
        if inner < 0 or inner >= outer:
            msg = f"Bad dust cloud bounds ({inner:.4g} - {outer:.4g} AU)"
            logger.critical(msg)
            raise AccretionError(msg)
        self.inner = inner
        self.outer = outer
        self.bands = [DustBand(inner, outer)]
        logger.debug(f"Creating the head of the dust list ({inner:.4g} - {outer:.4g}).")

    def __repr__(self):
        return (
            f"{type(self).__name__} ({self.inner:.4g} - {self.outer:.4g} AU)\n"
            f"{len(self.bands)} bands, dust left: {self.dust_left()}"
        )

    def __len__(self):
        return len(self.bands)

    def __iter__(self):
        return iter(self.bands)

    def has_dust_in(self, inside, outside):
        """
        Whether any band touching [inside, outside] still holds dust
        """
        bands = iter(self.bands)
        band = next(bands, None)
        while band is not None and band.outer_edge < inside:
            band = next(bands, None)
        if band is None:
            return False
        if band.dust_present:
            return True
        while band is not None and band.inner_edge < outside:
            if band.dust_present:
                return True
            band = next(bands, None)
        return False

    def dust_left(self):
        return any(band.dust_present for band in self.bands)

    def first_dust_band(self):
        for band in self.bands:
            if band.dust_present:
                return band
        return None

    def sweep_and_update(self, a, e, mass, crit_mass, dust_density):
        """
        Sweep the cloud with a body and return its new mass, see
        protoverses.accrete.sweep.collect_dust
        """
        from protoverses.accrete.sweep import collect_dust

        return collect_dust(self, mass, a, e, crit_mass, dust_density)

    def replace(self, index, pieces):
        """
        Replace the band at index with the given contiguous pieces. The pieces
        must cover exactly the band they replace.
        Returns:
            int:
                Number of pieces inserted, so callers can step past them
        """
        band = self.bands[index]
        if pieces[0].inner_edge != band.inner_edge or pieces[-1].outer_edge != band.outer_edge:
            msg = (
                f"Band pieces ({pieces[0].inner_edge:.4g} - {pieces[-1].outer_edge:.4g}) "
                f"do not cover the band ({band.inner_edge:.4g} - {band.outer_edge:.4g})"
            )
            logger.critical(msg)
            raise AccretionError(msg)
        self.bands[index : index + 1] = pieces
        return len(pieces)

    def normalize(self):
        """
        Drop zero-width bands and merge neighbouring inert bands
        """
        bands = []
        for band in self.bands:
            if band.outer_edge <= band.inner_edge:
                continue
            if (
                bands
                and not band.gas_present
                and not bands[-1].gas_present
                and band.same_content(bands[-1])
            ):
                bands[-1].outer_edge = band.outer_edge
                continue
            bands.append(band)
        self.bands = bands

    def check_partition(self):
        """
        Raise AccretionError if the bands no longer partition the cloud
        """
        problem = None
        if not self.bands:
            problem = "dust cloud has no bands"
        elif self.bands[0].inner_edge != self.inner or self.bands[-1].outer_edge != self.outer:
            problem = (
                f"bands span ({self.bands[0].inner_edge:.4g} - "
                f"{self.bands[-1].outer_edge:.4g}) instead of "
                f"({self.inner:.4g} - {self.outer:.4g})"
            )
        else:
            for band, next_band in zip(self.bands, self.bands[1:]):
                if band.outer_edge != next_band.inner_edge:
                    problem = f"gap or overlap at {band.outer_edge:.6g} AU"
                    break
            for band in self.bands:
                if band.width <= 0:
                    problem = f"empty band at {band.inner_edge:.6g} AU"
                    break
        if problem is not None:
            logger.critical(problem)
            raise AccretionError(problem)
