"""Test suite for archflow.

Test Structure:
- unit/: Unit tests per package area (models, layout, timeline, scene, config, cli, utils)
- fixtures/diagrams/: Sample diagram documents in JSON and YAML
- conftest.py: Shared diagram fixtures
"""
