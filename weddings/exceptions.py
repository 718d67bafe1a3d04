# weddings/exceptions.py
# Errores de dominio que las rutas traducen a respuestas HTTP.


class GuestNotFoundError(LookupError):
    """Una edición (simple o en lote) apunta a un guest_id que no existe."""

    def __init__(self, guest_id: int):
        super().__init__(f"Guest {guest_id} not found")
        self.guest_id = guest_id


class InvitationIdExhaustedError(RuntimeError):
    """No se pudo obtener un invitation_id libre tras todos los intentos."""

    def __init__(self, attempts: int):
        super().__init__(f"No free invitation id after {attempts} attempts")
        self.attempts = attempts
