import random


class ScriptedRandom(random.Random):
    """Random source whose randint returns a fixed target, clamped to the requested bounds."""

    def __init__(self, target):
        super().__init__(target)
        self.target = target

    def randint(self, a, b):
        return min(max(self.target, a), b)


def scripted_reader(*answers):
    it = iter(answers)

    def reader(prompt):
        return next(it)
    return reader


class FakeClock:
    """Returns the given readings in order, then keeps repeating the last one."""

    def __init__(self, *readings):
        self.readings = list(readings)

    def __call__(self):
        if len(self.readings) > 1:
            return self.readings.pop(0)
        return self.readings[0]
