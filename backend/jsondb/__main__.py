from jsondb.mcp_server import main

main()
