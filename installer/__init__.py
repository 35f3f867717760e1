"""
Install and uninstall pipelines for the syscgo binaries.

This package holds the task model, the pipeline builder, the orchestration
state machine and the drivers that feed it events.
"""
