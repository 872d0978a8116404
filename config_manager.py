"""Configuration management for the Las Vegas N-Queens experiments.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize experiment defaults, the retry budget, and the demonstration
sequence.

File format (high-level)
------------------------
- experiment_settings: default sweep size/reps, single-solution size/k, RNG
  seed (null = time-based).
- retry_settings: max_trials and time_limit for the retry loop (null = no
  bound).
- output_settings: output directory, datestamped filenames, worker count.
- demo_sequence: ordered list of steps, each ``{"mode": "sweep", "size", "reps"}``
  or ``{"mode": "solve", "size", "k"}``.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Return experiment defaults (sweep/solve sizes, reps, seed depth, seed)."""
        return self.config.get("experiment_settings", {})

    def get_retry_settings(self):
        """Return the retry-loop budget (max_trials, time_limit)."""
        return self.config.get("retry_settings", {})

    def get_output_settings(self):
        """Return output directory, filename stamping and worker settings."""
        return self.config.get("output_settings", {})

    def get_demo_sequence(self):
        """Return the list of demonstration steps (empty list when absent)."""
        return self.config.get("demo_sequence", [])

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
