"""TraceForge pipeline compiler.

This module turns tracing instance configurations into pipeline graphs
for the telemetry runtime.
"""

from .assembler import PipelineAssembler, compile_all, compile_instance
from .credentials import SecretResolver
from .exporters import ExporterSetBuilder
from .graph import Pipeline, PipelineGraph
from .ordering import ProcessorKind, order_processors
from .processors import ProcessorSet, ProcessorSetBuilder

__all__ = [
    "PipelineAssembler",
    "compile_all",
    "compile_instance",
    "SecretResolver",
    "ExporterSetBuilder",
    "Pipeline",
    "PipelineGraph",
    "ProcessorKind",
    "order_processors",
    "ProcessorSet",
    "ProcessorSetBuilder",
]
