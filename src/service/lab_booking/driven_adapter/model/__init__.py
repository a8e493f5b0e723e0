from src.service.lab_booking.driven_adapter.model.account_model import AccountModel
from src.service.lab_booking.driven_adapter.model.reservation_model import ReservationModel


__all__ = ['AccountModel', 'ReservationModel']
