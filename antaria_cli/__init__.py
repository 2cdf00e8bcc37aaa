"""
Antaria CLI - Command-line interface for saved regions.

Usage:
    antaria list
    antaria show <region-id>
    antaria trace config/traces/tokyo_station.yaml
    antaria delete <region-id>
    antaria delete-all --yes
"""

__version__ = "1.0.0"
