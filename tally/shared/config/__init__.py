"""
Shared Config Module
====================

YAML settings files (``settings/defaults.yaml`` plus optional ``user.yaml`` and
``project.yaml``) read by ``tally.shared.core.configuration.ConfigManager``.
"""
