"""
External solver drivers and their registry.
"""

from sweepopt.registry import Registry

from .base import RawSolverResult, SolverDriver
from .pymoo_drivers import GADriver, GAMultiObjDriver, ParetoSearchDriver, ParticleSwarmDriver, PymooDriver

SOLVER_DRIVERS: Registry[SolverDriver] = Registry("solver drivers")

for _driver in (GADriver(), GAMultiObjDriver(), ParetoSearchDriver(), ParticleSwarmDriver()):
    SOLVER_DRIVERS.register(_driver.name, _driver)
del _driver

__all__ = [
    "RawSolverResult",
    "SolverDriver",
    "PymooDriver",
    "GADriver",
    "GAMultiObjDriver",
    "ParetoSearchDriver",
    "ParticleSwarmDriver",
    "SOLVER_DRIVERS",
]
