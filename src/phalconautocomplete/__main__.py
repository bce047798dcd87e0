from phalconautocomplete.cli.main_cli import main

raise SystemExit(main())
