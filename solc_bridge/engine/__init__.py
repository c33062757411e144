"""Execution engines that host a compiler artifact.

- CompilerEngine: abstract three-call interface (version, license, compile) plus dispose
- EngineMetadata: which exported symbols were bound
- V8Engine: implementation on an embedded V8 isolate
"""

from .base import CompilerEngine, EngineMetadata
from .v8_engine import V8Engine

__all__ = ["CompilerEngine", "EngineMetadata", "V8Engine"]
