from protoverses.util.errors import ConfigError
from protoverses.util.log import resolve_level

DEFAULT_PARAMS = {
    # Seed for the universe's random source, required for reproducibility
    "seed": None,
    # Number of independent systems to generate
    "nsystems": 1,
    # Whether to build moons around each planet
    "moons": False,
    # Optional list of star dicts, first one is the primary. A star whose
    # mass is missing or None gets a random one. When None the
    # number of stars and their masses are drawn at random.
    "stars": None,
    "log_level": "WARNING",
    "show_progress": True,
}


def resolve_params(params=None):
    """
    Merge user parameters over the defaults and validate them
    Args:
        params (dict or None):
            User supplied generation parameters
    Returns:
        dict:
            Complete parameter dictionary
    """
    params = {} if params is None else dict(params)
    unknown = set(params) - set(DEFAULT_PARAMS)
    if unknown:
        raise ConfigError(f"Unknown generation parameters: {sorted(unknown)}")

    resolved = {**DEFAULT_PARAMS, **params}
    if resolved["seed"] is None:
        raise ConfigError(
            "For reproducibility the seed should be given, not drawn at random."
        )
    if int(resolved["nsystems"]) < 1:
        raise ConfigError("nsystems must be at least 1")
    resolved["nsystems"] = int(resolved["nsystems"])

    stars = resolved["stars"]
    if stars is not None:
        if len(stars) == 0:
            raise ConfigError("stars must hold at least the primary star")
        for star_dict in stars:
            # A missing or None mass is drawn at random when the star is built
            mass = star_dict.get("mass")
            if mass is not None and mass <= 0:
                raise ConfigError(f"Star mass must be positive: {star_dict}")
    if resolved["log_level"] is not None:
        resolve_level(resolved["log_level"])
    return resolved
