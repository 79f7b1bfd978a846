from enum import IntEnum


class AccessLevel(IntEnum):
    """Permission levels of project and group members.

    See https://docs.gitlab.com/ee/api/members.html#roles
    """

    NO_ACCESS = 0
    MINIMAL_ACCESS = 5
    GUEST = 10
    REPORTER = 20
    DEVELOPER = 30
    MAINTAINER = 40
    # Name used before GitLab 11.0.
    MASTER = 40
    # Only valid for groups.
    OWNER = 50
