from ghactivity.main import main

raise SystemExit(main())
