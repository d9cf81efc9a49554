import threading
from sphana_tokenizer.exceptions import OperationCancelledException

class CancellationToken:
    """Cooperative cancellation flag shared between a caller and a long running operation."""

    def __init__(self):
        self.__event = threading.Event()

    def cancel(self) -> None:
        self.__event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self.__event.is_set()

    def throw_if_cancellation_requested(self) -> None:
        if self.__event.is_set():
            raise OperationCancelledException()
