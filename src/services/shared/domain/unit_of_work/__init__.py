from .unit_of_work import UnitOfWork as UnitOfWork
