from cargo_post.cli.main import main

main()
