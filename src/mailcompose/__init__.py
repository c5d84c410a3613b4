"""Mailcompose: build RFC5322 email messages."""
