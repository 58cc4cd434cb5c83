from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """
    Which endpoint a response came from.

    Only used to look up per-endpoint array key exceptions and to guess
    the envelope key (``<op_type>Response``). Never mutated.
    """
    service_name: str
    op_type: str

    @property
    def envelope_key(self) -> str:
        return f"{self.op_type}Response"
