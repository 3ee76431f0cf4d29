from .server import main


if __name__ == "__main__":
    print("Starting Sweet Shop MCP Server...")
    main()
