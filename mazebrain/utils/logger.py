# mazebrain/utils/logger.py


class TickLogger:
    def __init__(self):
        self.ticks = []
        self.outputs = []
        self.anomalies = []
        self.lobotomies = 0

    def log_tick(self, tick, outputs, anomalies=0):
        self.ticks.append(tick)
        self.outputs.append(list(outputs))
        self.anomalies.append(anomalies)

    def log_lobotomy(self):
        self.lobotomies += 1

    @property
    def total_anomalies(self):
        return sum(self.anomalies)

    def last_outputs(self):
        return self.outputs[-1] if self.outputs else None
