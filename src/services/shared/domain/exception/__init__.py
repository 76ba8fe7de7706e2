from .exceptions import (
    BookingAlreadyCancelledException as BookingAlreadyCancelledException,
)
from .exceptions import (
    BookingReferenceConflictException as BookingReferenceConflictException,
)
from .exceptions import (
    BookingTerminalStateException as BookingTerminalStateException,
)
from .exceptions import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exceptions import (
    DomainException as DomainException,
)
from .exceptions import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exceptions import (
    InfrastructureException as InfrastructureException,
)
from .exceptions import (
    InvalidDateRangeException as InvalidDateRangeException,
)
from .exceptions import (
    OptimisticLockException as OptimisticLockException,
)
from .exceptions import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exceptions import (
    ResourceUnavailableException as ResourceUnavailableException,
)
