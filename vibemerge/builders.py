from vibemerge.models import CleanupRequest, CommandPayload, PRMetadata


def build_merge_commands(repository: str, pr_number: int) -> list[str]:
    return [
        f"gh pr --repo {repository} ready {pr_number}",
        f"gh pr --repo {repository} merge {pr_number} --squash",
    ]


def build_command_payload(
    metadata: PRMetadata,
    branch: str,
    work_dir: str,
) -> CommandPayload:
    # branch comes from config, not from the PR metadata
    return CommandPayload(
        repo=metadata.repository,
        branch=branch,
        type=metadata.event_action,
        dir=work_dir,
        commands=build_merge_commands(metadata.repository, metadata.pr_number),
    )


def build_cleanup_request(channel: str, ts: str, ttl: int) -> CleanupRequest:
    return CleanupRequest(channel=channel, ts=ts, ttl=ttl)
