from prometheus_client import Counter, Histogram


class FarmVisitMetrics:
    """
    Farm Visit Reservation Core Metrics Collector

    Tracks request lifecycle transitions and capacity guard outcomes
    """

    def __init__(self) -> None:
        # ========== Visit Request Lifecycle ==========
        self.visit_requests_submitted = Counter(
            'farm_visit_requests_submitted_total',
            'Total submitted visit requests',
            ['visit_type'],
        )

        self.visit_request_transitions = Counter(
            'farm_visit_request_transitions_total',
            'Visit request status transitions',
            ['from_status', 'to_status', 'result'],  # result: success/rejected
        )

        # ========== Capacity Guard ==========
        self.capacity_operations = Counter(
            'farm_visit_capacity_operations_total',
            'Capacity reserve/release operations',
            ['operation', 'result'],  # operation: reserve/release
        )

        self.capacity_operation_duration = Histogram(
            'farm_visit_capacity_operation_duration_seconds',
            'Capacity guard operation duration',
            ['operation'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        )

    def record_submission(self, *, visit_type: str) -> None:
        self.visit_requests_submitted.labels(visit_type=visit_type).inc()

    def record_transition(self, *, from_status: str, to_status: str, success: bool) -> None:
        self.visit_request_transitions.labels(
            from_status=from_status,
            to_status=to_status,
            result='success' if success else 'rejected',
        ).inc()

    def record_capacity(self, *, operation: str, success: bool, duration: float) -> None:
        self.capacity_operations.labels(
            operation=operation, result='success' if success else 'rejected'
        ).inc()
        self.capacity_operation_duration.labels(operation=operation).observe(duration)


# Global metrics instance
metrics = FarmVisitMetrics()
