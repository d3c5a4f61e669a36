"""
Error kinds raised by the recipe import engine.

Only these escape parse_recipe_from_url(); the message is safe to show to users.
"""


class RecipeParseError(Exception):
    """Base exception for recipe import"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class FetchTimeoutError(RecipeParseError):
    """Raised when the page did not load within the fetch timeout"""
    def __init__(self):
        super().__init__("Request timed out. The recipe page took too long to load.")


class FetchConnectionError(RecipeParseError):
    """Raised on DNS, refused connection and other network-level failures"""
    def __init__(self, detail: str = None):
        self.detail = detail
        if detail:
            super().__init__(f"Could not connect to URL: {detail}")
        else:
            super().__init__("Could not connect to URL. Check the link or try again later.")


class HttpStatusError(RecipeParseError):
    """Raised when the page answered with a non-2xx status"""
    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        if status_code == 403:
            message = "Access denied (403). This site may block automated requests."
        elif status_code == 404:
            message = "Page not found (404). Check the recipe URL."
        else:
            message = f"Failed to fetch recipe page: {status_code} {reason}".rstrip()
        super().__init__(message)


class NoRecipeFoundError(RecipeParseError):
    """Raised when the page loaded but no strategy produced a usable field"""
    def __init__(self):
        super().__init__(
            "No recipe data found on this page. The site may use JavaScript to load "
            "the recipe, or the format is not supported."
        )
