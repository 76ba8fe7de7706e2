from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    DomainException as DomainException,
)
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exception import (
    ResourceUnavailableException as ResourceUnavailableException,
)
from .repository import Repository as Repository
from .unit_of_work import UnitOfWork as UnitOfWork
from .value_object import (
    Currency as Currency,
)
from .value_object import (
    IsoDateTime as IsoDateTime,
)
from .value_object import (
    Money as Money,
)
from .value_object import (
    RentalPeriod as RentalPeriod,
)
from .value_object import (
    StayPeriod as StayPeriod,
)
from .value_object import (
    UserId as UserId,
)
