"""Execution of the generated file creation script."""

from realmgen.execution.runner import execute_generated_script, persist_script, sanitize_script

__all__ = ["execute_generated_script", "persist_script", "sanitize_script"]
