"""Version information for the X-Ray exporter."""

SDK_VERSION = "0.1.0"
SDK_NAME = "xray-exporter"
