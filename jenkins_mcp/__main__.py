from .mcp import run_stdio

if __name__ == "__main__":
    run_stdio()
