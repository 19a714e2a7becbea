"""markup_scout.crawler: live HTTP crawling and link extraction."""
