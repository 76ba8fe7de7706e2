from .aggregate import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
