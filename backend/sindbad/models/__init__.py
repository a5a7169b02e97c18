from .accounts import Account
from .customers import Customer
from .bookings import Booking
from .visas import Visa
from .finance import Expense, Debt

__all__ = [
    'Account',
    'Customer', 'Booking', 'Visa',
    'Expense', 'Debt',
]
