from rustdoc_md.cli import main

raise SystemExit(main())
