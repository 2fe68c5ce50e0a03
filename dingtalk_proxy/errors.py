class DispatchError(Exception):
    """Falha ao validar, montar ou enviar a mensagem para o DingTalk."""


class MissingField(DispatchError):
    def __init__(self, field, scope):
        self.field = field
        self.scope = scope
        super().__init__(f"{field} is missing in {scope}")


class UnrecognizedAlertType(DispatchError):
    def __init__(self, alert_type):
        self.alert_type = alert_type
        super().__init__(f"invalid alert type: {alert_type}")


class EncodingError(DispatchError):
    pass


class TransportError(DispatchError):
    pass
