"""Browser automation layer (Playwright).

The quote flow talks to :class:`~quote_worker.browser.page.QuotePage`, a
small capability interface; ``playwright_page`` adapts Playwright to it and
``alternatives`` runs ordered first-success action lists.
"""
