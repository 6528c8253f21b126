class MachineError(Exception):
    """Base class for machine state errors."""


class InvalidTransition(MachineError):
    def __init__(self, machine_id: int, action: str, status: str):
        self.machine_id = machine_id
        self.action = action
        self.status = status
        super().__init__(f"Action '{action}' is not valid for machine {machine_id} in status '{status}'")


class UnknownMachine(MachineError):
    def __init__(self, machine_id: int):
        self.machine_id = machine_id
        super().__init__(f"Machine {machine_id} does not exist")
