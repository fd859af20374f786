"""Line markers and file conventions shared by the .editorconfig tooling."""

FILE_NAME = ".editorconfig"

SECTION_DIVIDER = "##########################################"
CUSTOM_SECTION_HEADER_PREFIX = "# Custom - "
CODE_ANALYZERS_RULES_LABEL = "Code Analyzers Rules"
CUSTOM_SECTION_FIRST_LINE = "[*.{cs,csx,cake}]"
ROOT_MARKER = "root = true"

AUTOGENERATED_HEADER = "# ATC temporary suppressions"
AUTOGENERATED_FILE_PATTERN = "[*.cs]"
AUTOGENERATED_INSTRUCTIONS = (
    "# Please fix all generated temporary suppressions",
    "# either by code changes or move the",
    "# suppressions one by one to the relevant",
    "# 'Custom - Code Analyzers Rules' section.",
)

COMMENT_PREFIX = "#"
SEVERITY_KEY_PATTERN = r"dotnet_diagnostic\..+\.severity"
