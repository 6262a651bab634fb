"""URL rules, Slack deep links, configuration, paths and icons for a browser picker."""

__version__ = "0.7.0"