from mcp_use_guide.server import main

main()
