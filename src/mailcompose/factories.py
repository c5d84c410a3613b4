"""
Mailcompose factories
"""

import factory

from mailcompose.rfc5322.address import Group, Mailbox


class MailboxFactory(factory.Factory):
    """A factory to build random named mailboxes for testing purposes."""

    class Meta:
        model = Mailbox

    address = factory.Sequence(lambda n: f"john.doe{n!s}@example.org")
    name = factory.Faker("name")


class UnnamedMailboxFactory(MailboxFactory):
    """A factory to build mailboxes without display name."""

    name = None


class GroupFactory(factory.Factory):
    """A factory to build groups of random mailboxes."""

    class Meta:
        model = Group

    name = factory.Sequence(lambda n: f"group {n!s}")
    mailboxes = factory.LazyFunction(lambda: MailboxFactory.build_batch(2))
