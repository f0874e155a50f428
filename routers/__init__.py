from routers import auth, projects, skills, themes, users

__all__ = ["auth", "themes", "users", "projects", "skills"]
