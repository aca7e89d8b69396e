from mdeditor.main import main

raise SystemExit(main())
