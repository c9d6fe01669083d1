"""Outbound email: mailer implementations and templates."""

from app.infrastructure.external.email.mailer import LogOnlyMailer, ResendMailer

__all__ = ["LogOnlyMailer", "ResendMailer"]
