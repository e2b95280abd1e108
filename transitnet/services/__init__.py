"""Services layer - Application orchestration.

This module contains the application services that orchestrate the
flow of data through adapters to fulfill use cases.

Available services:
- NetworkAnalysisService: Routing and structural analysis of a network
"""

from .network_analysis import NetworkAnalysisService

__all__ = ["NetworkAnalysisService"]
