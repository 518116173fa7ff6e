"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Environment configuration for universal-test-engine.
# Save one file per environment (dev.yaml, staging.yaml, ...) in a directory and
# pass the directory to --config to select the file through TEST_ENV.
# API_BASE_URL, UI_BASE_URL, TEST_TIMEOUT and TEST_RETRIES override the values below.

environment:
  name: dev
  # At least one base URL is required.
  api_base_url: "https://api.example.com"
  ui_base_url: "https://app.example.com"

execution:
  timeout_ms: 30000
  retries: 0
  # Cases of one suite run on this many worker threads.
  workers: 4
  action_timeout_ms: 15000
  navigation_timeout_ms: 30000

auth:
  # bearer | basic | api-key | none
  strategy: none
  # bearer: credentials are POSTed to token_endpoint and the token is read from
  # token, data.token, access_token or data.access_token.
  # token_endpoint: /auth/login
  # basic: credentials.username and credentials.password.
  # credentials:
  #   username: "<OPTIONAL>"
  #   password: "<OPTIONAL>"
  # api-key: api_key (or credentials.apiKey) sent in header_name.
  # api_key: "<OPTIONAL>"
  header_name: X-API-Key

# Extra headers sent with every API request and browser page.
headers: {}

browser:
  # chromium | firefox | webkit
  name: chromium
  headless: true

features:
  # Attach a full-page screenshot to failed UI cases.
  screenshots: true
  # Compare declared snapshots with the baselines in snapshot_dir.
  snapshots: true
  snapshot_dir: snapshots
  max_diff_pixel_ratio: 0.01
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
