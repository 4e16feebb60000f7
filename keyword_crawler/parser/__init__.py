"""keyword_crawler.parser: turning fetched bodies into visible text, links and keyword matches."""
