"""Web application helpers: sanitizing, escaping, CSRF, redirects and friends."""
