"""Event approval workflow core: status registry, transition rules, audit history, dashboard projections."""

__version__ = "0.1.0"
