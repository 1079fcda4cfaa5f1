PROJECTS = "/projects"
DEPLOYMENTS = "/deployments"
PROJECT_GROUPS = "/project-groups"
ENGINEERS = "/engineers"
USERS = "/users"
MAINTENANCE = "/admin/maintenance"
HEALTH = "/health"

# Auth
AUTH_LOGIN = "/auth/login"
AUTH_LOGOUT = "/auth/logout"
AUTH_REGISTER = "/auth/register"
AUTH_REFRESH = "/auth/refresh"
AUTH_ME = "/auth/me"
AUTH_PROFILE = "/auth/profile"
AUTH_CHANGE_PASSWORD = "/auth/change-password"
