pytest_plugins = [
    "tests.fixtures.clocks",
    "tests.fixtures.aws_fixtures",
    "tests.fixtures.app_fixtures",
]
