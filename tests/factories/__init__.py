"""Factory classes for test data generation."""

import factory
from factory.django import DjangoModelFactory
from faker import Faker

from alerts.enums import AlertSeverity, VisibilityType

fake = Faker()


class TeamFactory(DjangoModelFactory):
    """Factory for Team model."""

    class Meta:
        model = "alerts.Team"

    name = factory.Sequence(lambda n: f"{fake.word()}-team-{n}")
    description = factory.LazyAttribute(lambda _: fake.sentence())


class UserFactory(DjangoModelFactory):
    """Factory for User model."""

    class Meta:
        model = "alerts.User"

    name = factory.LazyAttribute(lambda _: fake.name())
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    phone_number = factory.LazyAttribute(lambda _: fake.numerify("+1555#######"))
    team = factory.SubFactory(TeamFactory)


class AlertFactory(DjangoModelFactory):
    """Factory for an organization-wide, always-open Alert."""

    class Meta:
        model = "alerts.Alert"

    title = factory.LazyAttribute(lambda _: fake.sentence(nb_words=4))
    message = factory.LazyAttribute(lambda _: fake.text(max_nb_chars=200))
    severity = AlertSeverity.WARNING.value
    visibility_type = VisibilityType.ORGANIZATION.value
    visibility_target = None
    start_time = None
    expiry_time = None
    reminder_enabled = True
    created_by = None
