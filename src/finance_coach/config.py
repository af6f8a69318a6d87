"""
Process-level settings for the finance coach analytics.

Component thresholds live on the components themselves (see ``CONFIG`` on each
class); this module only holds values read from the environment.
"""
import os

DB_PATH = os.environ.get('FINANCE_COACH_DB', 'finances.db')
LOG_LEVEL = os.environ.get('FINANCE_COACH_LOG_LEVEL')


def merge_config(defaults, overrides=None):
    """Return a copy of ``defaults`` updated with ``overrides``.

    Unknown keys are rejected so a typo cannot silently fall back to a default.
    """
    config = dict(defaults)
    if overrides:
        unknown = set(overrides) - set(defaults)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        config.update(overrides)
    return config
