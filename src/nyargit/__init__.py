"""NyarGit: a thread-safe gateway over git repositories."""
