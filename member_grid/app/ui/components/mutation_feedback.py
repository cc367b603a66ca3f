from member_grid.app.grid.overlay import MutationStatus, PendingMutation


def print_mutation_outcome(mutation: PendingMutation | None) -> None:
    if mutation is None:
        return
    if mutation.status is MutationStatus.CONFIRMED:
        print(f"[success] operation={mutation.kind} member={mutation.record_id}")
    elif mutation.status is MutationStatus.FAILED:
        # nothing is rolled back: the grid keeps showing the local change
        print(
            "[mutation-error] "
            f"operation={mutation.kind} "
            f"member={mutation.record_id} "
            f"code={mutation.error_code}"
        )
    else:
        print(f"[pending] operation={mutation.kind} member={mutation.record_id}")
