"""Builders for Cloud Functions resource names."""

CLOUD_FUNCTIONS_API = "cloudfunctions.googleapis.com"


def project_name(project: str) -> str:
    return f"projects/{project}"


def location_name(project: str, region: str) -> str:
    """Returns `projects/<project>/locations/<region>`."""
    return f"{project_name(project)}/locations/{region}"


def function_name(project: str, region: str, name: str) -> str:
    """Returns `projects/<project>/locations/<region>/functions/<name>`."""
    return f"{location_name(project, region)}/functions/{name}"


def service_name(project: str, api_name: str) -> str:
    """Service Usage resource name of an API on a project."""
    return f"{project_name(project)}/services/{api_name}"
