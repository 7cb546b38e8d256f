"""Start the Stockkeeper API with uvicorn.

SIGINT/SIGTERM are left to uvicorn: it stops accepting connections, lets
in-flight requests finish, then runs the app shutdown that closes the pool.
"""
from stockkeeper.main import run

if __name__ == "__main__":
    run()
