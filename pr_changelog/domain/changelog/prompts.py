CHANGELOG_SYSTEM = """Your task is to describe the change in the current commit diff, given the context data of PreviousLogs and CommitMessage.
Format any class, field or parameter name using backticks.
Make sure the most meaningful changes are mentioned at least once.
Try to correlate to the PR title given as context.
Your reply should be in format {reply_prefix}<content>"""

CHANGELOG_HUMAN = """PRTitle: {pr_title}
PreviousLogs: {previous_logs}
CommitMessage: {commit_message}
CommitDiff: {commit_diff}"""
