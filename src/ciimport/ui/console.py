"""Console output formatting utilities for ciimport."""

from __future__ import annotations

import sys
from typing import Optional


class Console:
    """Centralized console output formatting."""
    
    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.
        
        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug
    
    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))
    
    def print_import_started(
        self,
        directory: str,
        repo_url: Optional[str],
        jenkins_url: str,
    ) -> None:
        """Print import start information."""
        print("\nIMPORT STARTED")
        print(f"Directory: {directory}")
        print(f"Repository: {repo_url or '(not yet known)'}")
        print(f"Jenkins: {jenkins_url}")
        print()
    
    def print_step(self, name: str) -> None:
        """Print phase start message."""
        print(f"STEP: {name}")
    
    def print_skipped(self, name: str, reason: str) -> None:
        """Print a skipped sub-step."""
        print(f"  {name} (skipped: {reason})")
    
    def print_committed(self, message: str) -> None:
        print(f"  committed: {message}")
    
    def print_created(self, kind: str, location: str) -> None:
        """Print a resource created on a remote server."""
        print(f"  created {kind}: {location}")
    
    def print_import_complete(self, job_url: str) -> None:
        """Print final import summary."""
        print("\n" + "=" * 40)
        print("IMPORT COMPLETE")
        print("=" * 40)
        print(f"  Job: {job_url}")
    
    def print_warning(self, message: str) -> None:
        """Print a non-fatal warning."""
        print(f"WARNING: {message}", file=sys.stderr)
    
    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.
        
        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)
    
    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)
    
    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)
    
    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
