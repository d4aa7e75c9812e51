"""CLI command modules for time-tracker."""
