"""UI messages and strings for time-tracker.

All user-facing text printed by the command line shell lives here so the
core services never format output themselves.
"""

PROJECT_TAGLINE = "Log what you do, one tap at a time"

HELP_TEXT = f"""
[bold cyan]tt[/bold cyan] - Time Tracker: {PROJECT_TAGLINE}

[bold]Logging:[/bold]
  [cyan]log[/cyan]         Record an activity with the current time
  [cyan]comment[/cyan]     Add a comment to the latest activity
  [cyan]list[/cyan]        Show the log, newest first
  [cyan]edit[/cyan]        Replace the activity and comments of an entry

[bold]Data:[/bold]
  [cyan]export[/cyan]      Export the log as JSON and clear it
  [cyan]config[/cyan]      Show or edit the activity configuration
  [cyan]theme[/cyan]       Show or change the display theme

[bold]Examples:[/bold]
  [dim]$ tt log Work[/dim]
  [dim]$ tt comment "Wrote report"[/dim]
  [dim]$ tt edit 0 --activity Gym --comments "warmup, cardio"[/dim]
  [dim]$ tt export --dest ~/exports[/dim]
"""

# =============================================================================
# Success Messages
# =============================================================================

SUCCESS_MESSAGES = {
    "recorded": "Logged '{activity}' at {timestamp}",
    "comment_added": "Comment added to '{activity}'",
    "entry_updated": "Entry {index} updated",
    "exported": "Logs exported and cleared ({count} record(s) -> {file_name})",
    "config_saved": "Configuration saved ({count} activities)",
    "theme_saved": "Theme set to {theme}",
}

# =============================================================================
# Error Messages
# =============================================================================

ERROR_MESSAGES = {
    "no_logs": "No logs available. Please log an activity first.",
    "invalid_activity": "Activity name cannot be empty.",
    "index_out_of_range": "No entry at position {index}. Run 'tt list' to see positions.",
    "export_failed": "Failed to export logs: {error}",
    "invalid_config": "Invalid YAML configuration: {error}",
    "invalid_theme": "Unknown theme '{theme}'. Choose 'light' or 'dark'.",
    "storage_failed": "Could not save changes: {error}",
    "config_file_missing": "Configuration file not found: {path}",
    "generic_error": "An error occurred: {error}",
}

# =============================================================================
# Info and Warning Messages
# =============================================================================

INFO_MESSAGES = {
    "empty_log": "The log is empty.",
    "config_unchanged": "Configuration unchanged.",
    "current_theme": "Current theme: {theme}",
}

WARNING_MESSAGES = {
    "unconfigured_activity": "'{activity}' is not one of the configured activities.",
    "empty_export": "The log is empty; exporting an empty file.",
}
