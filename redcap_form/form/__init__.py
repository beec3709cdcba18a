"""Form decoding against a data dictionary."""

from redcap_form.form.form import FieldNotFoundError, Form

__all__ = ["FieldNotFoundError", "Form"]
