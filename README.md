# browsers

Building blocks for a browser picker, a tool that sends each link to the
right browser, browser profile or app.

## What it does

- **URL rules** (`browsers.url_rule`): match links against patterns of the
  form `[scheme://]hostname[/path][?query][#fragment]`. `to_url_matcher`
  turns a rule into a `UrlMatcher` and fills every missing part with a
  wildcard. `UrlMatcher.to_glob_matcher()` compiles the rule into a
  `UrlGlobMatcher`, which provides `url_str_matches` and `url_matches`.
  Hostname labels and query parameters are matched one segment at a time:
  `*` covers a single label and `**` covers any number of them. Matching
  ignores case. A rule or URL that cannot be parsed raises `ValueError`.
- **Slack deep links** (`browsers.slack_url_parser`): `convert_slack_uri`
  turns `https://<team>.slack.com/...` links to canvases, users, files,
  channels, messages and thread messages into `slack://` URIs. Any other
  link opens the workspace's channel view.
- **Slack workspaces** (`browsers.slack_profiles`): `find_slack_profiles`
  reads Slack's `storage/root-state.json` and returns one `BrowserProfile`
  for each workspace, sorted by name. Each profile is limited to
  `<domain>.slack.com`. `parse_workspaces` and `load_workspaces` return the
  bare `SlackWorkspace` records.
- **Configuration** (`browsers.config`): `load_config` and `save_config`
  read and write `config.json` in a directory you pass in. A `Config` holds
  hidden apps and profiles, the profile order, the default profile, opening
  rules (`ConfigRule`), UI settings (`UIConfig`, `ConfiguredTheme`) and
  behaviour settings (`BehavioralConfig`). If the file is missing, it is
  created with the defaults. If the file cannot be read, it is copied to
  `config.corrupted.json` and the defaults are returned.
- **Per-platform locations** (`browsers.paths`): the cache, logs, config,
  runtime and resources directories on macOS, Linux and Windows. It also
  gives the places where Chromium- and Firefox-based browsers keep their
  user data.
- **Command lines** (`browsers.commands`): `split_command` splits a
  Windows-style command string. `guess_executable_path` picks the last
  argument that is neither a `%` placeholder nor an option.
  `remove_quotes` strips surrounding double quotes.
- **Icons** (`browsers.icons`): `save_as_circular` resizes an image to
  64×64, covers the pixels outside `circular_mask` and saves the result as
  PNG.
- **macOS sandbox check** (`browsers.macos_sandbox`):
  `has_sandbox_entitlement` runs `codesign` to find out whether an app
  bundle has the app-sandbox entitlement.

## What it does not do

This package provides library functions only. It has no command-line
program and no graphical picker window. It does not discover the browsers
installed on the system, it does not register itself as the default
browser, and it does not open links in other applications.

## Installation

```
pip install .
```

## Examples

Match a link against a rule:

```python
from browsers.url_rule import to_url_matcher

matcher = to_url_matcher("app.company.xyz/v2/**").to_glob_matcher()
matcher.url_str_matches("https://app.company.xyz/v2/matches/everything")  # True

to_url_matcher("beginning.*/**").to_glob_matcher().url_str_matches(
    "https://beginning.of.something.great/v2"
)  # False: one * covers a single hostname label
```

Turn a Slack link into a deep link:

```python
from urllib.parse import urlsplit
from browsers.slack_url_parser import convert_slack_uri

convert_slack_uri("T0000000", "myteam", urlsplit("https://myteam.slack.com/archives/C0000001"))
# 'slack://channel?team=T0000000&id=C0000001'
```

Load the configuration, change it and save it:

```python
from browsers import paths
from browsers.config import load_config, save_config

root = paths.get_config_root_dir()
config = load_config(root)
config.hide_profile("firefox#default")
save_config(config, root)
```

## Running the tests

```
pip install .[test]
pytest
```