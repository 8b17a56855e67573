from ipv6request.cli import main

main()
