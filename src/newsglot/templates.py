"""Default file contents written by 'newsglot init'."""

DEFAULT_CONFIG_YAML = """\
# newsglot configuration
# Strings must use single quotes.

# Language the articles are written in. Selecting it never calls the translator.
source_language: 'id'

# Active translation provider: 'google' or 'mock'.
provider: 'google'

providers:
  google:
    timeout: 15
  mock: {}

# Token placed between texts when several are translated in one call.
# Pick something your provider leaves untouched.
separator: '|||'

# Upper bound in seconds for translating one article.
pass_timeout: 60

cache_enabled: true

# Used when the provider fails for an exact text.
fallback_translations:
  en:
    'Berita Terkini': 'Latest News'

style:
  theme: 'light'
  font_size: 'medium'
"""
