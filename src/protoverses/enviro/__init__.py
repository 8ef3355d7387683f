__all__ = ["SurfaceState", "iterate_surface_temp"]

from .surface import SurfaceState, iterate_surface_temp
