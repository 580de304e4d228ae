"""Queueing-cost simulation for a processing order - pure functions, no I/O."""

from dataclasses import dataclass, field

from .items import BacklogItem


@dataclass(frozen=True)
class QueuedJob:
    """One unit of work in the queue: how long it takes and what waiting costs."""

    key: int | str
    duration: float
    weight: float


@dataclass(frozen=True)
class Segment:
    """The stretch of time in which one job is processed."""

    key: int | str
    start: float
    duration: float
    waiting_weight: float
    cost: float
    cumulative_cost: float

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass
class SimulationResult:
    """Outcome of processing a queue in a fixed order."""

    total_cost: float = 0
    segments: list[Segment] = field(default_factory=list)
    accrued: dict[int | str, float] = field(default_factory=dict)

    @property
    def total_duration(self) -> float:
        return self.segments[-1].end if self.segments else 0


def jobs_from_items(items: list[BacklogItem]) -> list[QueuedJob]:
    """Reduce items to (duration, weight) jobs: duration = job size, weight = CoD."""
    return [QueuedJob(key=item.id, duration=item.job_size or 0, weight=item.cod or 0) for item in items]


def simulate_queue(jobs: list[QueuedJob]) -> SimulationResult:
    """
    Compute the delay cost of processing jobs strictly in the given order.

    Jobs run one at a time without preemption. While job k runs, every job
    positioned after it accrues cost at its own weight:

        segment_cost_k = duration_k * sum(weight_j for j after k)

    The total is the sum over all segments. `accrued` holds, per job, the
    cost billed while it waited for its turn.

    Pure function - no I/O.
    """
    total_duration = sum(job.duration for job in jobs)
    total_weight = sum(job.weight for job in jobs)
    if not jobs or total_duration <= 0 or total_weight <= 0:
        return SimulationResult()

    # Suffix sums of weight: waiting[k] = weight of every job after k
    waiting = [0] * len(jobs)
    running = 0
    for index in range(len(jobs) - 1, -1, -1):
        waiting[index] = running
        running += jobs[index].weight

    result = SimulationResult()
    elapsed = 0
    for index, job in enumerate(jobs):
        cost = job.duration * waiting[index]
        result.total_cost += cost
        result.accrued[job.key] = job.weight * elapsed
        result.segments.append(
            Segment(
                key=job.key,
                start=elapsed,
                duration=job.duration,
                waiting_weight=waiting[index],
                cost=cost,
                cumulative_cost=result.total_cost,
            )
        )
        elapsed += job.duration

    return result


def simulate_items(items: list[BacklogItem]) -> SimulationResult:
    """simulate_queue over items in the order given."""
    return simulate_queue(jobs_from_items(items))
