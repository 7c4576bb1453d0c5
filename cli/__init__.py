from cli.app import PolySolverApp

__all__ = ["PolySolverApp"]
