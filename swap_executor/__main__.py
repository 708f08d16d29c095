import uvicorn

from .config import get_settings


def main():
    host, port = get_settings().bind_host_port
    print(f"Starting swap executor on {host}:{port}")
    uvicorn.run("swap_executor.main:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
