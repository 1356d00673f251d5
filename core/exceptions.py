"""
Recipe Book Domain Exceptions
Errors raised by services and mapped to HTTP responses at the API boundary
"""


class RecipeBookError(Exception):
    """Base class for expected domain errors"""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class RecipeNotFoundError(RecipeBookError):
    status_code = 404
    message = "Recipe not found"


class CategoryNotFoundError(RecipeBookError):
    status_code = 404
    message = "Category not found"


class CategoryAlreadyExistsError(RecipeBookError):
    status_code = 409
    message = "Category already exists"


class DefaultCategoryError(RecipeBookError):
    """Raised when a user tries to modify a system category"""

    status_code = 403
    message = "Default categories cannot be removed"


class ExtractionError(RecipeBookError):
    """The vision model could not turn the photo into recipe fields"""

    status_code = 502
    message = "Could not analyze the image. Try again or fill the form manually."


class ExtractionUnavailableError(RecipeBookError):
    status_code = 503
    message = "Recipe photo extraction is not configured"


class InvalidRecipeError(RecipeBookError):
    status_code = 400
    message = "Recipe title is required"
