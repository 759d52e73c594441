"""Shared form utilities."""


class JsonErrorsMixin:
    """Form errors in the shape the JSON endpoints return them."""

    def errors_as_json(self):
        return {field: [str(e) for e in errs] for field, errs in self.errors.items()}
