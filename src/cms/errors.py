# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Domain errors.

Every error carries the message shown to the user; handlers turn them into a
flash + redirect or an inline 422. I/O errors are not wrapped.
"""

from __future__ import annotations


class CmsError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(CmsError):
    def __init__(self, filename: str):
        super().__init__(f"{filename} does not exist")
        self.filename = filename


class ValidationError(CmsError):
    pass


class EmptyName(ValidationError):
    def __init__(self):
        super().__init__("A name is required.")


class BadExtension(ValidationError):
    def __init__(self, allowed):
        super().__init__(f"Sorry, only {' '.join(allowed)} extensions are accepted.")
        self.allowed = tuple(allowed)


class UnsafeName(ValidationError):
    def __init__(self, filename: str):
        super().__init__(f"{filename} is not a valid document name.")
        self.filename = filename


class DuplicateUsername(CmsError):
    def __init__(self, username: str):
        super().__init__("That username is already taken")
        self.username = username


class CredentialMismatch(CmsError):
    def __init__(self):
        super().__init__("Invalid Credentials")


class PasswordConfirmationMismatch(CmsError):
    def __init__(self):
        super().__init__("Passwords need to match")
